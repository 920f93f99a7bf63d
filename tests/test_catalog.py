from src.application.catalog import (
    apply_selection,
    curated_selection,
    filter_by_language,
    filter_by_query,
    language_facets,
    language_options,
    sort_repositories,
)
from src.domain.selection import FilterSelection, SortKey


def names(repos):
    return [repo.name for repo in repos]


def test_curated_selection_drops_forks_and_ranks_by_stars(sample_repos):
    curated = curated_selection(sample_repos)

    assert names(curated.repositories) == ["xbox-mapper", "LabTool", "dotfiles", "homelab"]
    assert all(not repo.fork for repo in curated.repositories)
    assert not curated.is_empty


def test_curated_selection_caps_at_four(make_repo):
    repos = [make_repo(f"repo-{i}", stars=i) for i in range(10)]

    curated = curated_selection(repos)

    assert names(curated.repositories) == ["repo-9", "repo-8", "repo-7", "repo-6"]


def test_curated_selection_keeps_fetch_order_on_ties(make_repo):
    repos = [make_repo("first", stars=3), make_repo("second", stars=3), make_repo("third", stars=3)]

    assert names(curated_selection(repos).repositories) == ["first", "second", "third"]


def test_curated_selection_empty_and_all_forks(make_repo):
    assert curated_selection([]).is_empty
    assert curated_selection([make_repo("a", fork=True), make_repo("b", fork=True)]).is_empty


def test_curated_selection_is_idempotent(sample_repos):
    assert curated_selection(sample_repos) == curated_selection(sample_repos)


def test_language_all_with_empty_query_only_sorts(sample_repos):
    visible = apply_selection(sample_repos, FilterSelection(sort_key=SortKey.STARS))

    assert sorted(names(visible)) == sorted(names(sample_repos))
    assert names(visible) == ["forked-lib", "xbox-mapper", "LabTool", "dotfiles", "homelab"]


def test_language_filter_is_exact_on_normalized_language(sample_repos):
    assert names(filter_by_language(sample_repos, "Go")) == ["LabTool", "homelab"]
    assert names(filter_by_language(sample_repos, "multi-lang")) == ["dotfiles"]
    assert filter_by_language(sample_repos, "go") == []


def test_query_matches_name_or_description_ignoring_case(make_repo):
    repo = make_repo("LabTool", description="small utility")
    other = make_repo("unrelated", description=None)

    assert filter_by_query([repo, other], "labtool") == [repo]
    assert filter_by_query([repo, other], "UTILITY") == [repo]
    assert filter_by_query([repo, other], "") == [repo, other]


def test_sort_by_updated_is_most_recent_first_and_stable(sample_repos):
    ordered = sort_repositories(sample_repos, SortKey.UPDATED)

    # dotfiles and homelab share a timestamp and keep fetch order
    assert names(ordered) == ["dotfiles", "homelab", "LabTool", "xbox-mapper", "forked-lib"]


def test_sort_by_stars_is_stable_on_ties(sample_repos):
    ordered = sort_repositories(sample_repos, SortKey.STARS)

    assert names(ordered) == ["forked-lib", "xbox-mapper", "LabTool", "dotfiles", "homelab"]


def test_apply_selection_combines_filters(sample_repos):
    selection = FilterSelection(query="JELLYFIN", language="Go", sort_key=SortKey.STARS)

    assert names(apply_selection(sample_repos, selection)) == ["homelab"]


def test_apply_selection_does_not_mutate_input(sample_repos):
    before = list(sample_repos)

    apply_selection(sample_repos, FilterSelection(sort_key=SortKey.STARS))

    assert sample_repos == before


def test_language_facets_are_distinct_and_sorted(make_repo):
    repos = [make_repo("a", language="Go"), make_repo("b", language="C"), make_repo("c", language="Go"),
             make_repo("d", language="Rust"), make_repo("e", language=None)]

    assert language_facets(repos) == ["C", "Go", "Rust"]


def test_language_facets_sort_case_sensitively(make_repo):
    repos = [make_repo("a", language="assembly"), make_repo("b", language="Shell")]

    assert language_facets(repos) == ["Shell", "assembly"]


def test_language_options_lead_with_all_sentinel(make_repo):
    options = language_options([make_repo("a", language="Go")])

    assert options == [("all", "All languages"), ("Go", "Go")]
