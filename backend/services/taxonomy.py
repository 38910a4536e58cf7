"""Taxonomy matcher: bucket extracted terms into skills/knowledge/tools/requirements.

Terms are checked in a fixed priority order: requirement patterns first,
then the skills table, then the knowledge table, then the tool heuristic.
Anything left over is ``unclassified`` but still reported under ``tools``,
since industry-specific vocabulary (equipment, software, procedures)
mostly lives there.

The default tables are the O*NET 30.1 universal skills (35) and knowledge
areas (33), which are industry-agnostic.
"""

import logging
import re
from dataclasses import dataclass, field

from models.schemas.keywords import ExtractedKeywords, KeywordCategory

logger = logging.getLogger(__name__)


@dataclass
class TaxonomyEntry:
    """A single skill or knowledge area."""

    id: str
    name: str
    description: str = ""
    group: str = ""
    aliases: list[str] = field(default_factory=list)

    def matches(self, term: str) -> bool:
        """True if ``term`` contains, or is contained in, the name or an alias."""
        lower = term.lower()
        for label in (self.name, *self.aliases):
            label = label.lower()
            if label in lower or lower in label:
                return True
        return False


@dataclass
class Taxonomy:
    """Read-only lookup tables for skills and knowledge areas."""

    skills: list[TaxonomyEntry] = field(default_factory=list)
    knowledge: list[TaxonomyEntry] = field(default_factory=list)

    def find_matching_skill(self, term: str) -> TaxonomyEntry | None:
        return next((s for s in self.skills if s.matches(term)), None)

    def find_matching_knowledge(self, term: str) -> TaxonomyEntry | None:
        return next((k for k in self.knowledge if k.matches(term)), None)


# ---------------------------------------------------------------------------
# O*NET skills: (id, name, group, description)
# ---------------------------------------------------------------------------
_ONET_SKILLS = [
    # Basic content
    ("2.A.1.a", "Reading Comprehension", "basic-content",
     "Understanding written sentences and paragraphs in work-related documents."),
    ("2.A.1.b", "Active Listening", "basic-content",
     "Giving full attention to what other people are saying and asking questions as appropriate."),
    ("2.A.1.c", "Writing", "basic-content",
     "Communicating effectively in writing as appropriate for the needs of the audience."),
    ("2.A.1.d", "Speaking", "basic-content",
     "Talking to others to convey information effectively."),
    ("2.A.1.e", "Mathematics", "basic-content",
     "Using mathematics to solve problems."),
    ("2.A.1.f", "Science", "basic-content",
     "Using scientific rules and methods to solve problems."),
    # Basic process
    ("2.A.2.a", "Critical Thinking", "basic-process",
     "Using logic and reasoning to identify the strengths and weaknesses of alternative solutions."),
    ("2.A.2.b", "Active Learning", "basic-process",
     "Understanding the implications of new information for problem-solving and decision-making."),
    ("2.A.2.c", "Learning Strategies", "basic-process",
     "Selecting and using training methods appropriate for the situation."),
    ("2.A.2.d", "Monitoring", "basic-process",
     "Assessing performance of yourself, other individuals, or organizations to make improvements."),
    # Social
    ("2.B.1.a", "Social Perceptiveness", "social",
     "Being aware of others' reactions and understanding why they react as they do."),
    ("2.B.1.b", "Coordination", "social",
     "Adjusting actions in relation to others' actions."),
    ("2.B.1.c", "Persuasion", "social",
     "Persuading others to change their minds or behavior."),
    ("2.B.1.d", "Negotiation", "social",
     "Bringing others together and trying to reconcile differences."),
    ("2.B.1.e", "Instructing", "social",
     "Teaching others how to do something."),
    ("2.B.1.f", "Service Orientation", "social",
     "Actively looking for ways to help people."),
    # Complex problem solving
    ("2.B.2.i", "Complex Problem Solving", "complex-problem-solving",
     "Identifying complex problems and reviewing related information to develop and evaluate options."),
    # Technical
    ("2.B.3.a", "Operations Analysis", "technical",
     "Analyzing needs and product requirements to create a design."),
    ("2.B.3.b", "Technology Design", "technical",
     "Generating or adapting equipment and technology to serve user needs."),
    ("2.B.3.c", "Equipment Selection", "technical",
     "Determining the kind of tools and equipment needed to do a job."),
    ("2.B.3.d", "Installation", "technical",
     "Installing equipment, machines, wiring, or programs to meet specifications."),
    ("2.B.3.e", "Programming", "technical",
     "Writing computer programs for various purposes."),
    ("2.B.3.g", "Operations Monitoring", "technical",
     "Watching gauges, dials, or other indicators to make sure a machine is working properly."),
    ("2.B.3.h", "Operation and Control", "technical",
     "Controlling operations of equipment or systems."),
    ("2.B.3.j", "Equipment Maintenance", "technical",
     "Performing routine maintenance on equipment."),
    ("2.B.3.k", "Troubleshooting", "technical",
     "Determining causes of operating errors and deciding what to do about it."),
    ("2.B.3.l", "Repairing", "technical",
     "Repairing machines or systems using the needed tools."),
    ("2.B.3.m", "Quality Control Analysis", "technical",
     "Conducting tests and inspections of products, services, or processes to evaluate quality."),
    # Systems
    ("2.B.4.e", "Judgment and Decision Making", "systems",
     "Considering the relative costs and benefits of potential actions to choose the most appropriate one."),
    ("2.B.4.g", "Systems Analysis", "systems",
     "Determining how a system should work and how changes in conditions will affect outcomes."),
    ("2.B.4.h", "Systems Evaluation", "systems",
     "Identifying measures or indicators of system performance and the actions needed to improve it."),
    # Resource management
    ("2.B.5.a", "Time Management", "resource-management",
     "Managing one's own time and the time of others."),
    ("2.B.5.b", "Management of Financial Resources", "resource-management",
     "Determining how money will be spent to get the work done."),
    ("2.B.5.c", "Management of Material Resources", "resource-management",
     "Obtaining and seeing to the appropriate use of equipment, facilities, and materials."),
    ("2.B.5.d", "Management of Personnel Resources", "resource-management",
     "Motivating, developing, and directing people as they work."),
]

# ---------------------------------------------------------------------------
# O*NET knowledge areas: (id, name, domain, description)
# ---------------------------------------------------------------------------
_ONET_KNOWLEDGE = [
    # Business and management
    ("2.C.1.a", "Administration and Management", "business",
     "Business and management principles: strategic planning, resource allocation, leadership."),
    ("2.C.1.b", "Administrative", "business",
     "Administrative and office procedures and systems."),
    ("2.C.1.c", "Economics and Accounting", "business",
     "Economic and accounting principles, financial markets, banking, financial reporting."),
    ("2.C.1.d", "Sales and Marketing", "business",
     "Principles and methods for showing, promoting, and selling products or services."),
    ("2.C.1.e", "Customer and Personal Service", "business",
     "Principles and processes for providing customer and personal services."),
    ("2.C.1.f", "Personnel and Human Resources", "business",
     "Personnel recruitment, selection, training, compensation, and labor relations."),
    # Manufacturing and production
    ("2.C.2.a", "Production and Processing", "manufacturing",
     "Raw materials, production processes, quality control, and distribution of goods."),
    ("2.C.2.b", "Food Production", "manufacturing",
     "Techniques and equipment for planting, growing, and harvesting food products."),
    # Engineering and technology
    ("2.C.3.a", "Computers and Electronics", "engineering",
     "Circuit boards, processors, electronic equipment, and computer hardware and software."),
    ("2.C.3.b", "Engineering and Technology", "engineering",
     "The practical application of engineering science and technology."),
    ("2.C.3.c", "Design", "engineering",
     "Design techniques, tools, and principles for technical plans, blueprints, and models."),
    ("2.C.3.d", "Building and Construction", "engineering",
     "Materials, methods, and tools for construction or repair of structures."),
    ("2.C.3.e", "Mechanical", "engineering",
     "Machines and tools, including their designs, uses, repair, and maintenance."),
    # Mathematics and science
    ("2.C.4.a", "Mathematics", "math-science",
     "Arithmetic, algebra, geometry, calculus, statistics, and their applications."),
    ("2.C.4.b", "Physics", "math-science",
     "Physical principles, laws, their interrelationships, and applications."),
    ("2.C.4.c", "Chemistry", "math-science",
     "Chemical composition, structure, and properties of substances."),
    ("2.C.4.d", "Biology", "math-science",
     "Plant and animal organisms, their tissues, cells, functions, and interactions."),
    ("2.C.4.e", "Psychology", "math-science",
     "Human behavior and performance, learning and motivation, psychological research methods."),
    ("2.C.4.f", "Sociology and Anthropology", "math-science",
     "Group behavior and dynamics, societal trends, cultures, and their origins."),
    ("2.C.4.g", "Geography", "math-science",
     "Features of land, sea, and air masses and the distribution of life."),
    # Health services
    ("2.C.5.a", "Medicine and Dentistry", "health",
     "Information and techniques needed to diagnose and treat human injuries and diseases."),
    ("2.C.5.b", "Therapy and Counseling", "health",
     "Diagnosis, treatment, and rehabilitation of physical and mental dysfunctions."),
    # Education and training
    ("2.C.6", "Education and Training", "education",
     "Curriculum and training design, teaching and instruction."),
    # Arts and humanities
    ("2.C.7.a", "English Language", "arts",
     "Structure and content of the English language."),
    ("2.C.7.b", "Foreign Language", "arts",
     "Structure and content of a foreign (non-English) language."),
    ("2.C.7.c", "Fine Arts", "arts",
     "Theory and techniques for music, dance, visual arts, drama, and sculpture."),
    ("2.C.7.d", "History and Archeology", "arts",
     "Historical events and their causes, indicators, and effects on civilizations."),
    ("2.C.7.e", "Philosophy and Theology", "arts",
     "Different philosophical systems and religions."),
    # Law and public safety
    ("2.C.8.a", "Public Safety and Security", "law",
     "Equipment, policies, and procedures for protecting people, data, property, and institutions."),
    ("2.C.8.b", "Law and Government", "law",
     "Laws, legal codes, court procedures, government regulations, and the political process."),
    # Communications
    ("2.C.9.a", "Telecommunications", "communications",
     "Transmission, broadcasting, switching, control, and operation of telecom systems."),
    ("2.C.9.b", "Communications and Media", "communications",
     "Media production, communication, and dissemination techniques."),
    # Transportation
    ("2.C.10", "Transportation", "transportation",
     "Moving people or goods by air, rail, sea, or road."),
]

ONET_TAXONOMY = Taxonomy(
    skills=[TaxonomyEntry(id=i, name=n, group=g, description=d) for i, n, g, d in _ONET_SKILLS],
    knowledge=[TaxonomyEntry(id=i, name=n, group=g, description=d) for i, n, g, d in _ONET_KNOWLEDGE],
)

# ---------------------------------------------------------------------------
# Requirement patterns: "5+ years", "bachelor's degree", "experience with", ...
# ---------------------------------------------------------------------------
_REQUIREMENT_PATTERNS: list[re.Pattern] = [
    re.compile(r"\d+\+?\s*(?:years?|yrs?)", re.IGNORECASE),
    re.compile(r"bachelor'?s?|master'?s?|phd|degree", re.IGNORECASE),
    re.compile(r"experience (?:with|in)", re.IGNORECASE),
    re.compile(r"\d+\s*to\s*\d+"),
    re.compile(r"certification|certified|license", re.IGNORECASE),
]

# Tool heuristic, domain neutral (not just software)
_TOOL_PATTERNS: list[re.Pattern] = [
    re.compile(r"software|system|platform|application", re.IGNORECASE),
    re.compile(r"tool|equipment|machine|device", re.IGNORECASE),
    re.compile(r"crm|erp|pos|ehr|emr", re.IGNORECASE),
]


def is_requirement(term: str) -> bool:
    return any(p.search(term) for p in _REQUIREMENT_PATTERNS)


def is_tool_keyword(term: str) -> bool:
    return any(p.search(term) for p in _TOOL_PATTERNS)


def categorize_keyword(
    term: str, taxonomy: Taxonomy = ONET_TAXONOMY
) -> tuple[KeywordCategory, str]:
    """Classify a single normalized term.

    Returns (category, value). For taxonomy hits the value is the canonical
    entry name; otherwise it is the term itself.
    """
    if is_requirement(term):
        return KeywordCategory.REQUIREMENT, term

    skill = taxonomy.find_matching_skill(term)
    if skill is not None:
        return KeywordCategory.SKILL, skill.name

    knowledge = taxonomy.find_matching_knowledge(term)
    if knowledge is not None:
        return KeywordCategory.KNOWLEDGE, knowledge.name

    if is_tool_keyword(term):
        return KeywordCategory.TOOL, term
    return KeywordCategory.UNCLASSIFIED, term


_BUCKETS: dict[KeywordCategory, str] = {
    KeywordCategory.REQUIREMENT: "requirements",
    KeywordCategory.SKILL: "skills",
    KeywordCategory.KNOWLEDGE: "knowledge",
    KeywordCategory.TOOL: "tools",
    KeywordCategory.UNCLASSIFIED: "tools",
}


def categorize_keywords(
    terms: list[str], taxonomy: Taxonomy = ONET_TAXONOMY
) -> ExtractedKeywords:
    """Bucket normalized terms, deduplicating while keeping first-seen order."""
    buckets: dict[str, dict[str, None]] = {
        "skills": {}, "knowledge": {}, "tools": {}, "requirements": {},
    }
    categories: dict[str, KeywordCategory] = {}

    for term in terms:
        category, value = categorize_keyword(term, taxonomy)
        categories.setdefault(term, category)
        buckets[_BUCKETS[category]][value] = None

    return ExtractedKeywords(
        skills=list(buckets["skills"]),
        knowledge=list(buckets["knowledge"]),
        tools=list(buckets["tools"]),
        requirements=list(buckets["requirements"]),
        raw=list(terms),
        categories=categories,
    )
