import pytest

from assembler import (
    Assembler,
    InvalidEntryName,
    InvalidProducerKind,
    UnknownDependency,
    UnresolvedEntry,
)


@pytest.fixture
def chain() -> Assembler:
    return (
        Assembler.create()
        .register("var1", lambda: 1)
        .register("var2", lambda var1: 2 + var1)
        .register("var3", lambda var1, var2: var1 * 10 + var2)
    )


def test_create_returns_an_assembler():
    assert isinstance(Assembler.create(), Assembler)


def test_release_multiple_values(chain):
    v1, v3 = chain.assemble().release("var1", "var3")

    assert v1 == 1
    assert v3 == 13


def test_release_single_value(chain):
    assert chain.assemble().release("var3") == 13


def test_release_returns_values_in_requested_order(chain):
    assert chain.assemble().release("var3", "var1", "var2") == (13, 1, 3)


def test_assemble_returns_the_assembler(chain):
    assert chain.assemble() is chain


def test_register_returns_the_assembler():
    sut = Assembler.create()
    assert sut.register("var1", lambda: 1) is sut


def test_register_expects_a_callable():
    with pytest.raises(InvalidProducerKind, match="Producer must be callable"):
        Assembler.create().register("var1", "foo")


def test_register_rejects_non_callable_even_for_immutable_name():
    with pytest.raises(InvalidProducerKind):
        Assembler.create({"foo": "bar"}).register("foo", 42)


@pytest.mark.parametrize("name", ["", None, 3])
def test_register_rejects_invalid_names(name):
    with pytest.raises(InvalidEntryName):
        Assembler.create().register(name, lambda: 1)


def test_assembled_value_cannot_be_overwritten():
    sut = Assembler.create().register("var1", lambda: 1).assemble()
    assert sut.release("var1") == 1

    sut.register("var1", lambda: 2).assemble()

    assert sut.release("var1") == 1


def test_unresolved_entry_can_be_overwritten():
    sut = Assembler.create().register("var1", lambda: 1).register("var1", lambda: 2)

    assert sut.assemble().release("var1") == 2


def test_parameters_sent_in_on_creation_are_available_to_producers():
    sut = (
        Assembler.create({"foo": "bar"})
        .register("dosomething", lambda foo: f"{foo}{foo}")
        .assemble()
    )

    assert sut.release("dosomething", "foo") == ("barbar", "bar")


def test_parameters_sent_in_on_creation_are_immutable():
    sut = Assembler.create({"foo": "bar"}).register("foo", lambda: "baz").assemble()

    assert sut.release("foo") == "bar"


def test_producer_parameters_are_passed_in_declared_order():
    def foo(v3, v2, v1):
        return f"{v3}{v2} {'true' if v1 else 'false'}"

    sut = (
        Assembler.create({"v1": False, "v2": "foo", "v3": 4})
        .register("foo", foo)
        .assemble()
    )

    assert sut.release("foo") == "4foo false"


def test_dependencies_resolve_regardless_of_registration_order():
    sut = (
        Assembler.create()
        .register("total", lambda price, tax: price + tax)
        .register("tax", lambda price: price // 5)
        .register("price", lambda: 100)
        .assemble()
    )

    assert sut.release("total") == 120


def test_producers_are_invoked_once():
    calls = []

    def var1():
        calls.append("var1")
        return 1

    sut = (
        Assembler.create()
        .register("var1", var1)
        .register("var2", lambda var1: var1 + 1)
        .register("var3", lambda var1: var1 + 2)
        .assemble()
        .assemble()
    )

    assert sut.release("var2", "var3") == (2, 3)
    assert calls == ["var1"]


def test_assemble_only_resolves_new_entries():
    calls = []

    def var1():
        calls.append("var1")
        return 1

    sut = Assembler.create().register("var1", var1).assemble()
    sut.register("var2", lambda var1: var1 * 2).assemble()

    assert sut.release("var2") == 2
    assert calls == ["var1"]


def test_release_unknown_name_raises():
    with pytest.raises(UnknownDependency, match="Unknown entry 'nope'") as exc_info:
        Assembler.create().assemble().release("nope")

    assert exc_info.value.name == "nope"


def test_release_before_assemble_raises():
    with pytest.raises(UnresolvedEntry, match="'var1' has not been assembled"):
        Assembler.create().register("var1", lambda: 1).release("var1")


def test_failing_producer_keeps_earlier_values():
    def boom(var1):
        raise RuntimeError("boom")

    sut = Assembler.create().register("var1", lambda: 1).register("var2", boom)

    with pytest.raises(RuntimeError, match="boom"):
        sut.assemble()

    assert sut.release("var1") == 1


def test_provides_registers_by_function_name():
    sut = Assembler.create({"name": "Arthur"})

    @sut.provides()
    def make_greeting(name):
        return f"Hello {name}"

    @sut.provides("shout")
    def upper(greeting):
        return greeting.upper()

    assert sut.assemble().release("greeting", "shout") == ("Hello Arthur", "HELLO ARTHUR")


def test_provides_returns_the_function():
    sut = Assembler.create()

    @sut.provides()
    def answer():
        return 42

    assert answer() == 42
    assert "answer" in sut


def test_merge_two_assemblies():
    sut1 = Assembler.create().register("var1", lambda: 1).assemble()
    sut2 = Assembler.create().register("var2", lambda: 2).assemble()

    assert sut1.merge(sut2).release("var1", "var2") == (1, 2)


def test_merge_with_empty_assembly_changes_nothing():
    sut = Assembler.create().register("var1", lambda: 1).assemble()

    merged = sut.merge(Assembler.create())

    assert merged.registry == sut.registry
    assert merged.release("var1") == 1


def test_merge_is_left_biased():
    left = Assembler.create({"shared": "left"})
    right = Assembler.create({"shared": "right", "other": 2})

    assert left.merge(right).release("shared", "other") == ("left", 2)


def test_merge_keeps_unresolved_left_entry_over_resolved_right_entry():
    left = Assembler.create().register("var1", lambda: "left")
    right = Assembler.create().register("var1", lambda: "right").assemble()

    merged = left.merge(right)

    assert merged.assemble().release("var1") == "left"


def test_merge_result_is_independent_of_sources():
    left = Assembler.create().register("var1", lambda: 1)
    right = Assembler.create().register("var2", lambda: 2)

    merged = left.merge(right)
    left.assemble()
    right.register("var3", lambda: 3)

    assert "var3" not in merged
    assert merged.registry["var1"].resolved is False
    assert merged.assemble().release("var1", "var2") == (1, 2)


def test_merge_does_not_modify_sources():
    left = Assembler.create().register("var1", lambda: 1)
    right = Assembler.create().register("var2", lambda: 2)

    left.merge(right).assemble()

    assert "var2" not in left
    assert left.registry["var1"].resolved is False


def test_get_returns_the_same_instance(shared_instances):
    first = Assembler.get()
    second = Assembler.get()

    assert first is second
    assert Assembler in shared_instances


def test_get_accepts_parameters(shared_instances):
    sut = (
        Assembler.get({"foo": "bar"})
        .register("dosomething", lambda foo: f"{foo}{foo}")
        .assemble()
    )

    assert sut.release("dosomething", "foo") == ("barbar", "bar")


def test_get_ignores_parameters_after_first_call(shared_instances):
    Assembler.get({"foo": "bar"})

    assert Assembler.get({"foo": "baz"}).release("foo") == "bar"


def test_get_is_distinct_from_create(shared_instances):
    assert Assembler.get() is not Assembler.create()


def test_register_with_explicit_dependencies():
    sut = (
        Assembler.create({"x": 3, "y": 7})
        .register("largest", max, depends_on=["x", "y"])
        .assemble()
    )

    assert sut.release("largest") == 7


def test_provides_with_explicit_dependencies():
    sut = Assembler.create({"first": "a", "second": "b"})

    @sut.provides(depends_on=["second", "first"])
    def joined(*parts):
        return "".join(parts)

    assert sut.assemble().release("joined") == "ba"


def test_register_over_unresolvable_annotation_binds_by_name():
    def uses(db: "Database"):  # noqa: F821
        return db * 2

    assert Assembler.create({"db": 21}).register("x", uses).assemble().release("x") == 42
