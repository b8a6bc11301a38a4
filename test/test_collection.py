from winenvedit.core.collection import find_insertion_index, find_variable, has_changed, sort_variables
from winenvedit.core.types import EnvironmentVariable, RegistryValueKind, VariableScope


def var(name, data="value", **kwargs):
    return EnvironmentVariable(name=name, data=data, **kwargs)


class TestHasChanged:
    def test_identical(self):
        assert not has_changed([var("A"), var("B")], [var("A"), var("B")])

    def test_order_does_not_matter(self):
        assert not has_changed([var("A"), var("B")], [var("B"), var("A")])

    def test_case_insensitive_names(self):
        assert not has_changed([var("path")], [var("PATH")])

    def test_count_differs(self):
        assert has_changed([var("A")], [var("A"), var("B")])

    def test_name_missing(self):
        assert has_changed([var("A")], [var("B")])

    def test_data_differs(self):
        assert has_changed([var("A", "1")], [var("A", "2")])

    def test_type_differs(self):
        assert has_changed([var("A")], [var("A", type=RegistryValueKind.EXPAND_STRING)])

    def test_flags_differ(self):
        assert has_changed([var("A")], [var("A", is_added=True)])
        assert has_changed([var("A")], [var("A", is_removed=True)])
        assert has_changed([var("A")], [var("A", is_volatile=True)])


class TestSortVariables:
    def test_case_insensitive(self):
        result = sort_variables([var("b"), var("C"), var("a")])
        assert [v.name for v in result] == ["a", "b", "C"]

    def test_returns_new_list(self):
        original = [var("B"), var("A")]
        sort_variables(original)
        assert [v.name for v in original] == ["B", "A"]


class TestFindVariable:
    def test_case_insensitive(self):
        variables = [var("Path")]
        assert find_variable(variables, "PATH") is variables[0]

    def test_missing(self):
        assert find_variable([var("A")], "B") is None

    def test_scope_filter(self):
        user = var("TEMP", scope=VariableScope.USER)
        system = var("TEMP", scope=VariableScope.SYSTEM)
        assert find_variable([user, system], "temp", VariableScope.SYSTEM) is system
        assert find_variable([user, system], "temp") is user


class TestFindInsertionIndex:
    def test_start(self):
        assert find_insertion_index([var("B"), var("C")], "A") == 0

    def test_middle(self):
        assert find_insertion_index([var("A"), var("C")], "b") == 1

    def test_end(self):
        assert find_insertion_index([var("A"), var("B")], "Z") == 2

    def test_empty(self):
        assert find_insertion_index([], "A") == 0

    def test_equal_name_goes_after(self):
        assert find_insertion_index([var("A"), var("B")], "a") == 1
