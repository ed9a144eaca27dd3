from django_gqlgraph.types.utils import SUGGESTION_THRESHOLD, suggestion_list


def test_suggestions_ordered_by_distance() -> None:
    assert suggestion_list("Usr", ["Users", "Post", "User"]) == ["User", "Users"]


def test_ties_keep_candidate_order() -> None:
    assert suggestion_list("Uer", ["Uber", "User"]) == ["Uber", "User"]
    assert suggestion_list("Uer", ["User", "Uber"]) == ["User", "Uber"]


def test_duplicates_reported_once() -> None:
    assert suggestion_list("Usr", ["User", "User"]) == ["User"]


def test_threshold_is_fixed() -> None:
    assert SUGGESTION_THRESHOLD == 2
    assert suggestion_list("Comment", ["User", "Post"]) == []
    assert suggestion_list("Pst", ["Post"], threshold=0) == []


def test_case_differences_are_close() -> None:
    assert suggestion_list("user", ["User"]) == ["User"]
