"""Tests for query document parsing"""
import pytest
from qlerror.errors import QueryError
from qlerror.language.ast import Document, Field, OperationDefinition
from qlerror.language.location import SourceLocation
from qlerror.language.parser import parse, parse_file
from qlerror.language.source import Source


def test_parse_shorthand_query():
    """A bare selection set is an anonymous query"""
    doc = parse("{ hero { name } }")
    assert isinstance(doc, Document)
    assert len(doc.definitions) == 1
    op = doc.definitions[0]
    assert isinstance(op, OperationDefinition)
    assert op.operation == "query"
    assert op.name is None
    hero = op.selection_set.selections[0]
    assert isinstance(hero, Field)
    assert hero.name.value == "hero"
    assert hero.selection_set.selections[0].name.value == "name"


def test_parse_named_operations():
    doc = parse("query A { a } mutation B { b }")
    assert [op.operation for op in doc.definitions] == ["query", "mutation"]
    assert [op.name.value for op in doc.definitions] == ["A", "B"]


def test_parse_alias_and_arguments():
    doc = parse('{ droid: hero(id: 7, name: "R2", tags: ["a" "b"], on: true, x: null) { name } }')
    field = doc.definitions[0].selection_set.selections[0]
    assert field.alias.value == "droid"
    assert field.response_key == "droid"
    args = {a.name.value: a.value.value for a in field.arguments}
    assert args == {"id": 7, "name": "R2", "tags": ["a", "b"], "on": True, "x": None}


def test_keyword_names_allowed_as_fields():
    doc = parse("{ query mutation }")
    names = [f.name.value for f in doc.definitions[0].selection_set.selections]
    assert names == ["query", "mutation"]


def test_comments_and_commas_ignored():
    doc = parse("# leading comment\n{ a, b # trailing\n c }")
    names = [f.name.value for f in doc.definitions[0].selection_set.selections]
    assert names == ["a", "b", "c"]


def test_nodes_carry_spans():
    """Field and name nodes point back into the source"""
    src = Source("{ hero { name } }")
    doc = parse(src)
    hero = doc.definitions[0].selection_set.selections[0]
    assert hero.loc.start == 2
    assert hero.loc.source is src
    name = hero.selection_set.selections[0]
    assert name.loc.start == 9
    assert name.name.loc.start == 9
    assert name.name.loc.end == 13


def test_alias_span_starts_at_alias():
    doc = parse("{ droid: hero }")
    field = doc.definitions[0].selection_set.selections[0]
    assert field.loc.start == 2
    assert field.name.loc.start == 9


def test_parse_node_feeds_query_error():
    """Errors built from parsed nodes resolve their locations"""
    doc = parse("{\n  hero {\n    nam\n  }\n}")
    nam = doc.definitions[0].selection_set.selections[0].selection_set.selections[0]
    err = QueryError("Unknown field", nam)
    assert err.locations == [SourceLocation(3, 5)]


def test_unexpected_eof():
    with pytest.raises(QueryError) as info:
        parse("{ hero ")
    err = info.value
    assert err.message == "Syntax Error: Unexpected <EOF>."
    assert err.positions == [7]
    assert err.locations == [SourceLocation(1, 8)]
    assert err.source.body == "{ hero "


def test_unexpected_character():
    with pytest.raises(QueryError) as info:
        parse("{ hero @ }")
    assert info.value.message == "Syntax Error: Unexpected character '@'."
    assert info.value.locations == [SourceLocation(1, 8)]


def test_unexpected_token():
    with pytest.raises(QueryError) as info:
        parse("{ hero }\n}")
    assert info.value.message.startswith("Syntax Error: Unexpected")
    assert info.value.locations == [SourceLocation(2, 1)]


def test_empty_document_is_syntax_error():
    with pytest.raises(QueryError, match="Syntax Error"):
        parse("")


def test_syntax_error_chains_lark_error():
    with pytest.raises(QueryError) as info:
        parse("{")
    assert info.value.__cause__ is not None


def test_parse_file_uses_path_as_source_name(tmp_path):
    path = tmp_path / "hero.graphql"
    path.write_text("{ hero }")
    doc = parse_file(str(path))
    assert doc.definitions[0].selection_set.loc.source.name == str(path)


@pytest.mark.parametrize("query", ['{ a(x: "\\q") }', '{ a(x: "t\tb") }'])
def test_invalid_string_value_is_syntax_error(query):
    """String literals the lexer accepts but cannot be decoded are located syntax errors"""
    with pytest.raises(QueryError) as info:
        parse(query)
    err = info.value
    assert err.message == "Syntax Error: Invalid string value."
    assert err.positions == [7]
    assert err.locations == [SourceLocation(1, 8)]
    assert isinstance(err.__cause__, ValueError)
