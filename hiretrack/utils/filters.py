"""In-memory filtering and aggregation over fetched lists."""

from collections import Counter
from collections.abc import Iterable, Sequence

from hiretrack.schemas.application import APPLICATION_STATUSES, Application, ApplicationStats
from hiretrack.schemas.job import BoardFacets, Job

ALL = "all"


def _matches(term: str, *values: str | None) -> bool:
    if not term:
        return True
    needle = term.lower()
    return any(needle in (value or "").lower() for value in values)


def filter_applications(
    items: Sequence[Application],
    status_filter: str = ALL,
    search_term: str = "",
) -> list[Application]:
    """Filter applications by exact status and a name/position/email search."""
    return [
        app
        for app in items
        if (status_filter == ALL or app.status == status_filter)
        and _matches(search_term, app.first_name, app.last_name, app.position, app.email)
    ]


def filter_jobs(
    items: Sequence[Job],
    status_filter: str = ALL,
    search_term: str = "",
    department: str = ALL,
    job_type: str = ALL,
) -> list[Job]:
    """Filter jobs by status, department and type plus a title/department/location search."""
    return [
        job
        for job in items
        if (status_filter == ALL or job.status == status_filter)
        and (department == ALL or job.department == department)
        and (job_type == ALL or job.type == job_type)
        and _matches(search_term, job.title, job.department, job.location)
    ]


def count_by_status(items: Iterable[Application | Job], statuses: Sequence[str]) -> dict[str, int]:
    """Counts for the filter tabs, with ``all`` holding the total."""
    items = list(items)
    counts = Counter(item.status for item in items)
    result = {ALL: len(items)}
    for status in statuses:
        result[status] = counts.get(status, 0)
    return result


def board_facets(jobs: Iterable[Job]) -> BoardFacets:
    """Distinct departments and types among active jobs, in first-seen order."""
    departments: dict[str, None] = {}
    types: dict[str, None] = {}
    for job in jobs:
        if job.status != "active":
            continue
        departments.setdefault(job.department)
        types.setdefault(job.type)
    return BoardFacets(departments=list(departments), types=list(types))


def application_stats(items: Iterable[Application]) -> ApplicationStats:
    counts = count_by_status(items, APPLICATION_STATUSES)
    return ApplicationStats(
        total=counts[ALL],
        active=counts["pending"] + counts["reviewed"] + counts["interviewed"],
        **{status: counts[status] for status in APPLICATION_STATUSES},
    )
