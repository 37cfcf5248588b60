from __future__ import annotations

import pickle

import pytest

from lexicon import Dictionary, MalformedInput, load_answers, load_dictionary


def _write(tmp_path, name, text):
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


def test_bundled_data_loads(dictionary):
    assert len(dictionary) > 400
    assert "right" in dictionary and "wrong" in dictionary
    answers = load_answers()
    assert "right" in answers
    assert all(len(a) == 5 for a in answers)


def test_bundled_dictionary_is_uniform(dictionary):
    assert {dictionary[w] for w in dictionary} == {1}
    assert dictionary.total == len(dictionary)


def test_load_dictionary_normalises_zero(tmp_path):
    p = _write(tmp_path, "dict.txt", "right 10\nwrong 0\n\nabout 3\n")
    d = load_dictionary(p)
    assert d.words == ("about", "right", "wrong")
    assert d["wrong"] == 1
    assert d.frequency("right") == 10
    assert d.total == 14
    assert d.probability("about") == pytest.approx(3 / 14)


@pytest.mark.parametrize(
    "line",
    [
        "right",            # missing frequency
        "righ 3",           # too short
        "rightt 3",         # too long
        "Right 3",          # upper case
        "r1ght 3",          # non-letter
        "right -1",         # negative
        "right  3",         # double space
        "right 3 4",        # trailing field
        "right three",
    ],
)
def test_load_dictionary_rejects_malformed_line(tmp_path, line):
    p = _write(tmp_path, "dict.txt", f"about 1\n{line}\n")
    with pytest.raises(MalformedInput, match=r":2:"):
        load_dictionary(p)


def test_load_dictionary_rejects_duplicates(tmp_path):
    p = _write(tmp_path, "dict.txt", "about 1\nabout 2\n")
    with pytest.raises(MalformedInput, match="duplicate"):
        load_dictionary(p)


def test_load_dictionary_rejects_empty_file(tmp_path):
    p = _write(tmp_path, "dict.txt", "\n\n")
    with pytest.raises(MalformedInput):
        load_dictionary(p)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_dictionary(tmp_path / "nope.txt")
    with pytest.raises(FileNotFoundError):
        load_answers(tmp_path / "nope.txt")


def test_load_answers_keeps_order(tmp_path):
    p = _write(tmp_path, "answers.txt", "wrong\nright\n\nabout\n")
    assert load_answers(p) == ["wrong", "right", "about"]


def test_load_answers_rejects_malformed(tmp_path):
    p = _write(tmp_path, "answers.txt", "right\nwr0ng\n")
    with pytest.raises(MalformedInput, match=r":2:"):
        load_answers(p)


def test_malformed_input_is_value_error():
    assert issubclass(MalformedInput, ValueError)


def test_dictionary_is_read_only():
    d = Dictionary({"right": 1})
    with pytest.raises(TypeError):
        d["wrong"] = 2
    with pytest.raises(AttributeError):
        d.extra = 1


def test_dictionary_rejects_bad_words():
    with pytest.raises(MalformedInput):
        Dictionary({"toolong": 1})


def test_dictionary_pickles(dictionary):
    copy = pickle.loads(pickle.dumps(dictionary))
    assert copy.words == dictionary.words
    assert dict(copy) == dict(dictionary)
    assert copy.total == dictionary.total
