"""Unit tests for list filters and aggregates."""

from datetime import UTC, datetime

import pytest

from hiretrack.schemas.application import APPLICATION_STATUSES, Application
from hiretrack.schemas.job import JOB_STATUSES, Job
from hiretrack.utils.filters import (
    application_stats,
    board_facets,
    count_by_status,
    filter_applications,
    filter_jobs,
)

NOW = datetime(2026, 3, 1, tzinfo=UTC)


def make_application(first, last, email, position, status="pending"):
    return Application(
        id=f"{first}-{last}".lower(),
        first_name=first,
        last_name=last,
        email=email,
        phone="555",
        experience="x",
        education="y",
        position=position,
        status=status,
        applied_date=NOW,
    )


def make_job(title, department, location, job_type="full-time", status="active"):
    return Job(
        id=title.lower().replace(" ", "-"),
        title=title,
        department=department,
        location=location,
        type=job_type,
        description="d",
        status=status,
        created_date=NOW,
    )


@pytest.fixture
def applications():
    return [
        make_application("Ada", "Lovelace", "ada@math.org", "Backend Engineer"),
        make_application("Alan", "Turing", "alan@bletchley.uk", "Data Scientist", "reviewed"),
        make_application("Grace", "Hopper", "grace@navy.mil", "Compiler Engineer", "hired"),
        make_application("Edsger", "Dijkstra", "ewd@utexas.edu", "Researcher", "rejected"),
    ]


@pytest.fixture
def jobs():
    return [
        make_job("Backend Engineer", "Engineering", "Remote"),
        make_job("Data Scientist", "Data", "London", "contract"),
        make_job("Designer", "Design", "Berlin", "part-time", status="paused"),
        make_job("Intern", "Engineering", "Remote", "internship", status="closed"),
    ]


class TestFilterApplications:
    """Test application filtering."""

    def test_all_with_empty_search_is_identity(self, applications):
        assert filter_applications(applications, "all", "") == applications

    def test_status_is_exact_match(self, applications):
        result = filter_applications(applications, "reviewed")
        assert [a.last_name for a in result] == ["Turing"]

    def test_search_is_case_insensitive(self, applications):
        result = filter_applications(applications, search_term="LOVELACE")
        assert [a.first_name for a in result] == ["Ada"]

    @pytest.mark.parametrize(
        "term,expected",
        [
            ("grace", ["Grace"]),
            ("dijkstra", ["Edsger"]),
            ("engineer", ["Ada", "Grace"]),
            ("bletchley", ["Alan"]),
        ],
    )
    def test_search_matches_any_field(self, applications, term, expected):
        result = filter_applications(applications, search_term=term)
        assert [a.first_name for a in result] == expected

    def test_status_and_search_combine(self, applications):
        result = filter_applications(applications, "hired", "engineer")
        assert [a.first_name for a in result] == ["Grace"]

    def test_no_match_returns_empty(self, applications):
        assert filter_applications(applications, "pending", "turing") == []

    def test_keeps_input_order(self, applications):
        reversed_apps = list(reversed(applications))
        assert filter_applications(reversed_apps) == reversed_apps


class TestFilterJobs:
    """Test job filtering."""

    def test_all_filters_bypass(self, jobs):
        assert filter_jobs(jobs) == jobs

    def test_search_covers_title_department_location(self, jobs):
        assert [j.title for j in filter_jobs(jobs, search_term="london")] == ["Data Scientist"]
        assert [j.title for j in filter_jobs(jobs, search_term="design")] == ["Designer"]
        assert [j.title for j in filter_jobs(jobs, search_term="intern")] == ["Intern"]

    def test_department_and_type_are_anded(self, jobs):
        result = filter_jobs(jobs, department="Engineering", job_type="internship")
        assert [j.title for j in result] == ["Intern"]

    def test_status_filter(self, jobs):
        assert [j.title for j in filter_jobs(jobs, status_filter="paused")] == ["Designer"]

    def test_search_with_facets(self, jobs):
        result = filter_jobs(jobs, search_term="remote", department="Engineering")
        assert [j.title for j in result] == ["Backend Engineer", "Intern"]


class TestAggregates:
    """Test tab counts, facets and dashboard stats."""

    def test_count_by_status(self, applications):
        counts = count_by_status(applications, APPLICATION_STATUSES)

        assert counts == {
            "all": 4,
            "pending": 1,
            "reviewed": 1,
            "interviewed": 0,
            "hired": 1,
            "rejected": 1,
        }

    def test_count_jobs_by_status(self, jobs):
        counts = count_by_status(jobs, JOB_STATUSES)
        assert counts == {"all": 4, "active": 2, "paused": 1, "closed": 1}

    def test_board_facets_only_from_active_jobs(self, jobs):
        facets = board_facets(jobs)

        assert facets.departments == ["Engineering", "Data"]
        assert facets.types == ["full-time", "contract"]

    def test_board_facets_empty(self):
        facets = board_facets([])
        assert facets.departments == []
        assert facets.types == []

    def test_application_stats(self, applications):
        stats = application_stats(applications)

        assert stats.total == 4
        assert stats.pending == 1
        assert stats.hired == 1
        assert stats.active == 2
