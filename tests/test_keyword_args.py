import pytest

from cljcompat.binding.bind import bind_call, pairs_to_mapping, resolve_keywords
from cljcompat.binding.shape import Default, ParameterShape
from cljcompat.config import BindOptions
from cljcompat.errors import MalformedKeywordArgs, UnknownKeyword
from cljcompat.types.keyword import Keyword
from cljcompat.types.markers import ABSENT


KWARGS = ParameterShape(keywords=["name", "age", "weight"])
KWARGS_DEFAULT = ParameterShape(keywords={"name": ABSENT, "age": 18, "weight": 150})


def test_keyword_binding_basic():
    # (kwargs :name "Tom" :age 20 :weight 145)
    resolved = bind_call(KWARGS, [], [Keyword("name"), "Tom", Keyword("age"), 20, Keyword("weight"), 145])
    assert dict(resolved) == {"name": "Tom", "age": 20, "weight": 145}


def test_keyword_defaults_fill_gaps():
    # (kwargsdefault :name "Tim")
    resolved = bind_call(KWARGS_DEFAULT, [], [Keyword("name"), "Tim"])
    assert dict(resolved) == {"name": "Tim", "age": 18, "weight": 150}


def test_unsupplied_keyword_without_default_is_absent():
    resolved = bind_call(KWARGS, [], [Keyword("name"), "Tom"])
    assert resolved["age"] is ABSENT
    assert resolved["weight"] is ABSENT


def test_supplied_none_is_distinct_from_absent():
    resolved = bind_call(KWARGS, [], [Keyword("age"), None])
    assert resolved["age"] is None
    assert resolved["name"] is ABSENT


def test_string_keys_and_colon_strings():
    resolved = bind_call(KWARGS_DEFAULT, [], [":name", "Tim", "age", 30])
    assert resolved["name"] == "Tim"
    assert resolved["age"] == 30


def test_mapping_remainder():
    resolved = bind_call(KWARGS_DEFAULT, [], {"name": "Tim", "weight": 160})
    assert dict(resolved) == {"name": "Tim", "age": 18, "weight": 160}


def test_keyword_odd_pairs_error():
    with pytest.raises(MalformedKeywordArgs) as exc:
        bind_call(KWARGS, [], [Keyword("name")])
    assert "Keyword arguments must be in pairs" in str(exc.value)


def test_non_keyword_key_is_malformed():
    with pytest.raises(MalformedKeywordArgs):
        bind_call(KWARGS, [], [1, 2])


def test_unknown_keyword_ignored_by_default():
    resolved = bind_call(KWARGS, [], [Keyword("z"), 2])
    assert "z" not in resolved


def test_unknown_keyword_strict_mode():
    with pytest.raises(UnknownKeyword) as exc:
        bind_call(KWARGS, [], [Keyword("z"), 2], strict_keywords=True)
    assert ":z" in str(exc.value)
    with pytest.raises(MalformedKeywordArgs):
        bind_call(KWARGS, [], [Keyword("z"), 2], options=BindOptions(strict_keywords=True))


def test_strict_mode_from_environment(monkeypatch):
    monkeypatch.setenv("CLJCOMPAT_STRICT_KEYWORDS", "1")
    with pytest.raises(UnknownKeyword):
        bind_call(KWARGS, [], [Keyword("z"), 2])
    # explicit argument wins over the environment
    assert "z" not in bind_call(KWARGS, [], [Keyword("z"), 2], strict_keywords=False)


def test_last_duplicate_key_wins():
    assert pairs_to_mapping([Keyword("a"), 1, Keyword("a"), 2]) == {"a": 2}


def test_positionals_then_keywords():
    # (lambda (x &key y) y)
    shape = ParameterShape("x", keywords=["y"])
    resolved = bind_call(shape, [10], [Keyword("y"), 7])
    assert resolved["x"] == 10 and resolved["y"] == 7


def test_rest_and_keywords_together():
    shape = ParameterShape("x", rest="more", keywords={"verbose": False})
    resolved = bind_call(shape, [1, 2, 3], [Keyword("verbose"), True])
    assert resolved["more"] == [2, 3]
    assert resolved["verbose"] is True


def test_default_expression_sees_earlier_bindings():
    calls = []

    def double_age(bound):
        calls.append(dict(bound))
        return bound["age"] * 2

    shape = ParameterShape("x", keywords={"age": 18, "twice": Default(double_age)})
    resolved = bind_call(shape, ["x0"], [])
    assert resolved["twice"] == 36
    assert calls == [{"x": "x0", "age": 18}]


def test_default_expression_not_evaluated_when_supplied():
    def boom(bound):
        raise AssertionError("should not be evaluated")

    shape = ParameterShape(keywords={"a": Default(boom)})
    assert bind_call(shape, [], [Keyword("a"), 1])["a"] == 1


def test_default_expression_evaluated_per_call():
    shape = ParameterShape(keywords={"items": Default(lambda bound: [])})
    first = bind_call(shape, [])["items"]
    second = bind_call(shape, [])["items"]
    assert first == second == []
    assert first is not second


def test_resolve_keywords_missing_marker():
    assert resolve_keywords({"a": ABSENT}, {}, missing="unset") == {"a": "unset"}
