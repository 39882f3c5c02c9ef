import pickle

import pytest

from cljcompat.binding.destructure import Keys, destructure
from cljcompat.binding.shape import Default
from cljcompat.errors import ArityMismatch, MissingRequiredField, UnknownField
from cljcompat.records import Record, construct, defrecord
from cljcompat.types.keyword import Keyword
from cljcompat.types.markers import UNSET


@pytest.fixture
def person():
    # (defrecord Person [name weight position])
    return defrecord("Person", ["name", "weight", "position"], defaults={"position": Keyword("employee")})


def test_construct_supplied_value_wins_over_default():
    fred = construct(
        {"name": "Fred", "position": Keyword("janitor")},
        defaults={"position": Keyword("employee")},
        required={"name"},
        fields=["name", "weight", "position"],
    )
    assert fred == {"name": "Fred", "weight": UNSET, "position": Keyword("janitor")}
    assert fred["weight"] is UNSET


def test_construct_fills_from_defaults():
    tim = construct({"name": "Tim"}, {"position": Keyword("employee")}, {"name"})
    assert tim["position"] == Keyword("employee")
    assert tim.fields == ("name", "position")


def test_construct_missing_required_field():
    with pytest.raises(MissingRequiredField) as exc:
        construct({"weight": 150}, {}, {"name"})
    assert "name" in str(exc.value)


def test_required_field_satisfied_by_default():
    rec = construct({}, {"name": "anon"}, {"name"})
    assert rec["name"] == "anon"


def test_construct_rejects_undeclared_fields():
    with pytest.raises(UnknownField):
        construct({"height": 180}, fields=["name"])


def test_unknown_field_access():
    rec = construct({"name": "Fred"})
    with pytest.raises(UnknownField):
        rec["salary"]
    with pytest.raises(UnknownField):
        rec.salary
    assert not hasattr(rec, "salary")
    assert "salary" not in rec
    assert rec.get("salary", 0) == 0


def test_keyword_and_attribute_access():
    rec = construct({"name": "Fred", "weight": 190})
    assert rec[Keyword("weight")] == 190
    assert rec.weight == 190
    assert Keyword("weight")(rec) == 190
    assert 10 + Keyword("weight")(rec) == 200


def test_records_are_immutable():
    rec = construct({"name": "Fred"})
    with pytest.raises(AttributeError):
        rec.name = "Joe"
    with pytest.raises(TypeError):
        rec["name"] = "Joe"
    changed = rec.assoc(name="Joe")
    assert rec.name == "Fred"
    assert changed.name == "Joe"
    with pytest.raises(UnknownField):
        rec.assoc(salary=1)


def test_default_expressions_see_earlier_fields():
    rec = construct({"weight": 100}, {"bmi_hint": Default(lambda bound: bound["weight"] // 10)}, fields=["weight", "bmi_hint"])
    assert rec["bmi_hint"] == 10


def test_positional_constructor(person):
    # (def joe (->Person "Joe" 190 :manager))
    joe = person("Joe", 190, Keyword("manager"))
    assert joe.type_name == "Person"
    assert joe["weight"] == 190
    assert person.accessor("weight")(joe) == 190
    assert person.accessor("weight").__name__ == "Person-weight"
    with pytest.raises(ArityMismatch):
        person("Joe", 190)


def test_from_map_leaves_gaps_unset(person):
    # (map->Person {:name "Fred", :position :janitor})
    fred = person.from_map({Keyword("name"): "Fred", Keyword("position"): Keyword("janitor")})
    assert fred == {"name": "Fred", "weight": UNSET, "position": Keyword("janitor")}
    assert person.is_instance(fred)


def test_with_defaults(person):
    # (->PersonWithDefaults {:name "Tim", :weight 152})
    tim = person.with_defaults({"name": "Tim", "weight": 152})
    assert tim == {"name": "Tim", "weight": 152, "position": Keyword("employee")}


def test_required_fields_on_record_type():
    employee = defrecord("Employee", ["name", "title"], required=["name"])
    with pytest.raises(MissingRequiredField):
        employee.from_map({"title": "boss"})
    with pytest.raises(UnknownField):
        defrecord("Broken", ["a"], defaults={"b": 1})


def test_record_equality_and_hash(person):
    a = person("Joe", 190, Keyword("manager"))
    b = person("Joe", 190, Keyword("manager"))
    assert a == b
    assert hash(a) == hash(b)
    other = defrecord("Robot", ["name", "weight", "position"])("Joe", 190, Keyword("manager"))
    assert a != other


def test_record_destructures_with_keys(person):
    joe = person("Joe", 190, Keyword("manager"))
    bound = destructure(Keys("name", "position"), joe)
    assert bound["name"] == "Joe"
    assert bound["position"] == Keyword("manager")


def test_record_pickles(person):
    joe = person("Joe", 190, Keyword("manager"))
    assert pickle.loads(pickle.dumps(joe)) == joe


def test_repr(person):
    rec = person("Joe", 190, Keyword("manager"))
    assert repr(rec) == "#Person{:name 'Joe', :weight 190, :position Keyword('manager')}"
    assert isinstance(rec, Record)


def test_record_equals_only_records_and_dicts():
    from types import MappingProxyType

    rec = construct({"a": 1})
    assert rec == {"a": 1}
    assert rec != MappingProxyType({"a": 1})
    assert rec != construct({"a": 1}, type_name="Other")


def test_fields_shadowed_by_methods_read_by_item():
    rec = construct({"fields": 1, "get": 2, "name": "Fred"})
    assert rec["fields"] == 1
    assert rec[Keyword("get")] == 2
    assert rec.fields == ("fields", "get", "name")
    assert rec.name == "Fred"
