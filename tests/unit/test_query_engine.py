"""Tests for policy term search, pagination and lookup.

Results are checked against a brute-force filter over the generated dataset.
"""

from collections.abc import Sequence
from datetime import date
from uuid import UUID, uuid4

import pytest

from policy_admin.core.database import Database
from policy_admin.core.result_types import ErrorKind
from policy_admin.models.policy import PolicyTerm
from policy_admin.services.policy_term_service import (
    PageRequest,
    PageResult,
    PolicyTermSearch,
    PolicyTermService,
    build_predicates,
)
from policy_admin.services.seed_service import SeedDataset
from policy_admin.services.sorting import DEFAULT_SORT, SortSpec, parse_sort


def matches(term: PolicyTerm, criteria: PolicyTermSearch) -> bool:
    """Brute-force evaluation of the search filters for one term."""
    query = (criteria.query or "").strip().lower()
    if query and not (
        query in term.policy.policy_number.lower()
        or query in term.policy.insured_name.lower()
    ):
        return False
    state = (criteria.state or "").strip().lower()
    if state and term.state.lower() != state:
        return False
    status = (criteria.status or "").strip().lower()
    if status and term.status.lower() != status:
        return False
    if criteria.exp_from is not None and term.effective_to_date < criteria.exp_from:
        return False
    if criteria.exp_to is not None and term.effective_to_date > criteria.exp_to:
        return False
    return True


def expected_ids(dataset: SeedDataset, criteria: PolicyTermSearch) -> set[UUID]:
    return {term.id for term in dataset.terms if matches(term, criteria)}


async def search(
    database: Database, criteria: PolicyTermSearch, page_request: PageRequest
) -> PageResult[PolicyTerm]:
    async with database.session() as session:
        result = await PolicyTermService(session).search(criteria, page_request)
    return result.unwrap()


async def collect_all(
    database: Database,
    criteria: PolicyTermSearch,
    size: int,
    sort: SortSpec = DEFAULT_SORT,
) -> tuple[list[PolicyTerm], Sequence[PageResult[PolicyTerm]]]:
    """Walk every page in order."""
    pages: list[PageResult[PolicyTerm]] = []
    page = 0
    while True:
        result = await search(
            database, criteria, PageRequest(page=page, size=size, sort=sort)
        )
        pages.append(result)
        page += 1
        if page >= result.total_pages:
            break
    return [term for result in pages for term in result.items], pages


class TestBuildPredicates:
    """Test predicate construction."""

    def test_no_filters_no_clauses(self) -> None:
        """An empty search produces no WHERE clauses."""
        assert build_predicates(PolicyTermSearch()) == []

    def test_blank_filters_are_skipped(self) -> None:
        """Blank text filters count as absent."""
        assert build_predicates(PolicyTermSearch(query="  ", state="", status=" ")) == []

    def test_one_clause_per_filter(self) -> None:
        """Every supplied filter contributes exactly one clause."""
        criteria = PolicyTermSearch(
            query="oh",
            state="CA",
            status="ACTIVE",
            exp_from=date(2023, 1, 1),
            exp_to=date(2024, 1, 1),
        )
        assert len(build_predicates(criteria)) == 5


class TestPageRequest:
    """Test page request bounds."""

    def test_offset(self) -> None:
        """Offset is page times size."""
        assert PageRequest(page=3, size=25).offset == 75

    @pytest.mark.parametrize(("page", "size"), [(-1, 20), (0, 0), (0, 201)])
    def test_out_of_bounds(self, page: int, size: int) -> None:
        """Negative pages and sizes outside [1, 200] are refused."""
        with pytest.raises(ValueError):
            PageRequest(page=page, size=size)

    def test_total_pages(self) -> None:
        """ceil(total / size), zero when empty."""
        assert PageResult(items=[], page=0, size=20, total_elements=0).total_pages == 0
        assert PageResult(items=[], page=0, size=20, total_elements=20).total_pages == 1
        assert PageResult(items=[], page=0, size=20, total_elements=21).total_pages == 2


class TestSearch:
    """Test filtering, sorting and pagination against the seeded dataset."""

    @pytest.mark.asyncio
    async def test_unfiltered_total(self, database: Database, seeded: SeedDataset) -> None:
        """With no filters every term is counted."""
        result = await search(database, PolicyTermSearch(), PageRequest())

        assert result.total_elements == len(seeded.terms)
        assert len(result.items) == 20
        assert result.page == 0
        assert result.size == 20

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "criteria",
        [
            PolicyTermSearch(state="CA"),
            PolicyTermSearch(state="tx", status="active"),
            PolicyTermSearch(status="EXPIRED", exp_from=date(2023, 6, 1)),
            PolicyTermSearch(exp_from=date(2024, 1, 1), exp_to=date(2024, 12, 31)),
            PolicyTermSearch(query="OH-0001", state="NY"),
            PolicyTermSearch(
                query="holdings",
                status="NON_RENEWED",
                exp_from=date(2022, 1, 1),
                exp_to=date(2025, 6, 30),
            ),
        ],
    )
    async def test_filters_are_anded(
        self, database: Database, seeded: SeedDataset, criteria: PolicyTermSearch
    ) -> None:
        """The result set equals the brute-force intersection of all filters."""
        terms, pages = await collect_all(database, criteria, size=50)

        expected = expected_ids(seeded, criteria)
        assert {term.id for term in terms} == expected
        assert pages[0].total_elements == len(expected)

    @pytest.mark.asyncio
    async def test_query_is_case_insensitive(
        self, database: Database, seeded: SeedDataset
    ) -> None:
        """q matches policy number and insured name regardless of case."""
        last_name = seeded.policies[0].insured_name.split()[1]

        upper, _ = await collect_all(database, PolicyTermSearch(query=last_name.upper()), 200)
        lower, _ = await collect_all(database, PolicyTermSearch(query=last_name.lower()), 200)

        expected = expected_ids(seeded, PolicyTermSearch(query=last_name))
        assert expected
        assert {term.id for term in upper} == expected
        assert {term.id for term in lower} == expected

    @pytest.mark.asyncio
    async def test_query_matches_policy_number(
        self, database: Database, seeded: SeedDataset
    ) -> None:
        """A lowercase policy number finds that policy's terms."""
        terms, _ = await collect_all(database, PolicyTermSearch(query="oh-000001"), 20)

        first_policy_terms = {
            term.id for term in seeded.terms if term.policy.policy_number == "OH-000001"
        }
        assert {term.id for term in terms} == first_policy_terms

    @pytest.mark.asyncio
    async def test_query_wildcards_are_literal(
        self, database: Database, seeded: SeedDataset
    ) -> None:
        """LIKE wildcards in q match themselves only."""
        result = await search(database, PolicyTermSearch(query="%"), PageRequest())

        assert result.total_elements == 0

    @pytest.mark.asyncio
    async def test_no_match(self, database: Database, seeded: SeedDataset) -> None:
        """A query matching nothing gives an empty page and zero pages."""
        result = await search(
            database, PolicyTermSearch(query="no-such-insured-xyz"), PageRequest()
        )

        assert result.items == []
        assert result.total_elements == 0
        assert result.total_pages == 0

    @pytest.mark.asyncio
    async def test_pages_concatenate_without_gaps(
        self, database: Database, seeded: SeedDataset
    ) -> None:
        """Concatenated pages reproduce the full sorted set exactly once."""
        terms, pages = await collect_all(database, PolicyTermSearch(), size=37)

        ids = [term.id for term in terms]
        assert len(ids) == len(set(ids)) == len(seeded.terms)
        assert len(pages) == pages[0].total_pages
        assert all(len(page.items) == 37 for page in pages[:-1])

        keys = [(term.effective_to_date, term.id) for term in terms]
        assert keys == sorted(keys)

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(
        self, database: Database, seeded: SeedDataset
    ) -> None:
        """Pages beyond the last one are empty but still report totals."""
        result = await search(database, PolicyTermSearch(), PageRequest(page=1000, size=200))

        assert result.items == []
        assert result.total_elements == len(seeded.terms)

    @pytest.mark.asyncio
    async def test_sort_by_term_number(self, database: Database, seeded: SeedDataset) -> None:
        """Ascending term_number yields non-decreasing values."""
        terms, _ = await collect_all(
            database, PolicyTermSearch(), size=200, sort=parse_sort("term_number,asc").unwrap()
        )

        numbers = [term.term_number for term in terms]
        assert numbers == sorted(numbers)
        assert numbers[0] == 1

    @pytest.mark.asyncio
    async def test_sort_descending(self, database: Database, seeded: SeedDataset) -> None:
        """Descending policy_number puts the highest number first."""
        result = await search(
            database,
            PolicyTermSearch(),
            PageRequest(size=10, sort=parse_sort("policy_number,desc").unwrap()),
        )

        numbers = [term.policy.policy_number for term in result.items]
        assert numbers == sorted(numbers, reverse=True)
        assert numbers[0] == seeded.policies[-1].policy_number

    @pytest.mark.asyncio
    async def test_storage_failure(self, database: Database) -> None:
        """Database errors come back as storage errors, not exceptions."""
        await database.drop_all()

        async with database.session() as session:
            result = await PolicyTermService(session).search(PolicyTermSearch(), PageRequest())

        assert result.is_err()
        assert result.unwrap_err().kind is ErrorKind.STORAGE


class TestGet:
    """Test single-term lookup."""

    @pytest.mark.asyncio
    async def test_found(self, database: Database, seeded: SeedDataset) -> None:
        """An existing term is returned with its policy loaded."""
        target = seeded.terms[5]

        async with database.session() as session:
            result = await PolicyTermService(session).get(target.id)

        term = result.unwrap()
        assert term.id == target.id
        assert term.policy.policy_number == target.policy.policy_number
        assert term.balance_due == target.balance_due

    @pytest.mark.asyncio
    async def test_not_found(self, database: Database, seeded: SeedDataset) -> None:
        """An unknown id is a not-found error."""
        async with database.session() as session:
            result = await PolicyTermService(session).get(uuid4())

        error = result.unwrap_err()
        assert error.kind is ErrorKind.NOT_FOUND
        assert error.message == "Policy term not found"
