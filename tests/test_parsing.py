import pytest

from extraction.parsing import JsonExtractionError, extract_json


def test_plain_json_array_is_returned_unchanged():
    assert extract_json('[{"name":"X"}]') == [{"name": "X"}]


def test_fenced_block_with_surrounding_text():
    assert extract_json('prefix ```json\n{"a":1}\n``` suffix') == {"a": 1}


def test_fenced_block_without_language_tag():
    assert extract_json('Here you go:\n```\n[1, 2]\n```') == [1, 2]


def test_bare_object_inside_prose():
    text = 'Sure! The business is {"name": "Acme", "categories": ["x"]}. Let me know.'
    assert extract_json(text) == {"name": "Acme", "categories": ["x"]}


def test_bare_array_inside_prose():
    text = 'Results: [{"name": "A"}, {"name": "B"}] -- end'
    assert extract_json(text) == [{"name": "A"}, {"name": "B"}]


def test_broken_fence_falls_back_to_bracket_span():
    text = '```json\n{"name": oops}\n``` but really {"name": "Acme"}'
    # The fenced block is invalid; the greedy span from the first "{" is too.
    with pytest.raises(JsonExtractionError):
        extract_json(text)


def test_array_tried_when_object_span_fails():
    text = 'note {not json} then [{"name": "A"}]'
    assert extract_json(text) == [{"name": "A"}]


@pytest.mark.parametrize("text", ["", "   ", "no json here", "{unterminated", "42", '"just a string"'])
def test_garbage_raises_extraction_error(text):
    with pytest.raises(JsonExtractionError):
        extract_json(text)


def test_extraction_error_is_a_value_error():
    with pytest.raises(ValueError):
        extract_json("nothing")


def test_deeply_nested_text_raises_extraction_error():
    with pytest.raises(JsonExtractionError):
        extract_json("[" * 100000)
    with pytest.raises(JsonExtractionError):
        extract_json("prefix " + "[" * 100000 + "]" * 100000)
