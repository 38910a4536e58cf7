import pytest

from services.nlp_model import (
    NltkModel,
    TransformersNerModel,
    _chunk_for_ner,
    build_nlp_model,
)


def test_build_nlp_model_defaults_to_nltk():
    model = build_nlp_model()
    assert type(model) is NltkModel
    assert not model.is_loaded


def test_build_nlp_model_with_ner_model():
    model = build_nlp_model("dslim/bert-base-NER", auto_download=True)
    assert isinstance(model, TransformersNerModel)
    assert model.ner_model == "dslim/bert-base-NER"
    assert model.auto_download


@pytest.fixture
def broken_nltk(monkeypatch):
    calls = {"tagger": 0, "chunk": 0}

    def _no_tagger():
        calls["tagger"] += 1
        raise LookupError("averaged_perceptron_tagger_eng not found")

    def _no_chunker(tagged):
        calls["chunk"] += 1
        raise LookupError("maxent_ne_chunker_tab not found")

    monkeypatch.setattr("nltk.tag.perceptron.PerceptronTagger", _no_tagger)
    monkeypatch.setattr("nltk.ne_chunk", _no_chunker)
    return calls


def test_nltk_model_degrades_without_data(broken_nltk):
    model = NltkModel()
    assert model.pos_tag(["Kafka", "streams"]) == []
    assert model.entities("Kafka streams", [("Kafka", "NNP")]) == []
    assert model.is_loaded


def test_nltk_model_loads_once(broken_nltk):
    model = NltkModel()
    model.pos_tag(["a"])
    model.pos_tag(["b"])
    model.entities("c", [("c", "NN")])
    assert broken_nltk == {"tagger": 1, "chunk": 1}


def test_transformers_entities_filter_and_clean():
    model = TransformersNerModel("fake-model")
    model._loaded = True
    model._ner = lambda chunk: [
        {"word": "Acme ##Corp", "score": 0.93},
        {"word": "Noise", "score": 0.2},
    ]
    assert model.entities("Worked at Acme Corp", []) == ["AcmeCorp"]
    assert model.entities("   ", []) == []


def test_transformers_entities_without_pipeline():
    model = TransformersNerModel("fake-model")
    model._loaded = True
    assert model.entities("Worked at Acme Corp", []) == []


def test_chunk_for_ner_respects_word_budget():
    paragraph = " ".join(["word"] * 200)
    chunks = _chunk_for_ner("\n\n".join([paragraph] * 3), max_words=300)
    assert len(chunks) == 3
    assert _chunk_for_ner("short\n\ntext") == ["short\n\ntext"]


@pytest.mark.integration
def test_nltk_model_tags_nouns():
    model = NltkModel(auto_download=True)
    tagged = model.pos_tag(["The", "engineer", "writes", "code"])
    assert ("engineer", "NN") in tagged
