# ===============================================
# tests/test_parsing.py
# Tolerant JSON extraction from model replies
# ===============================================

from src.generate.parsing import (
    clean_and_parse_json,
    interpret_response,
    parse_json_safe,
    remove_scratch_field,
)
from src.generate.types import StructuredPost, UnstructuredPost


def test_empty_and_non_string_inputs_yield_none():
    assert clean_and_parse_json("") is None
    assert clean_and_parse_json(None) is None
    assert clean_and_parse_json(42) is None
    assert parse_json_safe("") is None
    assert parse_json_safe(["{}"]) is None


def test_prose_and_truncated_json_yield_none():
    assert clean_and_parse_json("Here are some thoughts about your post.") is None
    assert clean_and_parse_json('{"headline": "Hi", "post": "bo') is None
    assert clean_and_parse_json('{"headline": "Hi", "post": }') is None


def test_fenced_block_is_parsed_and_hook_removed():
    text = '```json\n{"headline":"Hi","hook":"x","post":"body","hashtags":["a"]}\n```'
    assert clean_and_parse_json(text) == {"headline": "Hi", "post": "body", "hashtags": ["a"]}


def test_other_fence_tags():
    for tag in ("JSON", "Json", "javascript", "", "output"):
        text = f'```{tag}\n{{"post": "x"}}\n```'
        assert clean_and_parse_json(text) == {"post": "x"}, tag


def test_commentary_preamble_is_skipped():
    text = 'Here is the output:\n```json\n{"headline": "H", "post": "P"}\n```'
    assert clean_and_parse_json(text) == {"headline": "H", "post": "P"}
    text = 'Sure! {"post": "P"} Hope this helps.'
    assert clean_and_parse_json(text) == {"post": "P"}


def test_hook_removed_at_every_depth():
    text = (
        '{"hook": 1, "post": "p", '
        '"meta": {"hook": 2, "inner": {"hook": 3, "keep": true}}, '
        '"variants": [{"hook": 4, "post": "v1"}, [{"hook": 5}], "plain"]}'
    )
    assert clean_and_parse_json(text) == {
        "post": "p",
        "meta": {"inner": {"keep": True}},
        "variants": [{"post": "v1"}, [{}], "plain"],
    }


def test_remove_scratch_field_walks_lists():
    tree = [{"hook": "a", "b": [{"hook": "c"}]}]
    remove_scratch_field(tree)
    assert tree == [{"b": [{}]}]


def test_top_level_array_is_not_structured():
    assert clean_and_parse_json('["a", "b"]') is None
    assert parse_json_safe("true") is None


def test_parse_json_safe_keeps_hook_and_slices():
    assert parse_json_safe('{"hook": "x"}') == {"hook": "x"}
    assert parse_json_safe('noise {"a": 1} noise') == {"a": 1}
    assert parse_json_safe("no braces") is None


def test_interpret_response_structured():
    raw = '```json\n{"headline": "Hi", "hook": "x", "post": "  body \\n", "hashtags": ["#a", "b"]}\n```'
    content = interpret_response(raw)
    assert content == StructuredPost(headline="Hi", post="body", hashtags=["#a", "b"])


def test_interpret_response_tolerates_odd_fields():
    content = interpret_response('{"post": "body", "hashtags": "not-a-list"}')
    assert isinstance(content, StructuredPost)
    assert content.hashtags == []
    assert content.headline == ""


def test_interpret_response_unstructured():
    content = interpret_response("Just a plain post. Thoughts?")
    assert content == UnstructuredPost(raw_text="Just a plain post. Thoughts?")
