"""Shared fixtures for consolidation tests."""
import io
import zipfile

import pytest

HEADER = (
    "Class name,Class date,Location,Teacher First Name,Teacher Last Name,"
    "Checked in,Late cancellations,Total Revenue,Time (h),Non Paid Customers"
)
REPORT_PREFIX = "momence-teachers-payroll-report-aggregate-combined"


def make_csv(*lines: str) -> str:
    """Join data lines under the standard payroll report header."""
    return "\n".join((HEADER,) + lines) + "\n"


def make_zip(entries: dict) -> bytes:
    """Build an in-memory zip archive from a name -> text mapping."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, text in entries.items():
            archive.writestr(name, text)
    return buffer.getvalue()


@pytest.fixture
def march_report():
    """Report with two slots plus a footer row and a bad date."""
    return make_csv(
        "Studio Barre 57,2024-03-04 07:30:00,Kwality House,Anisha,Shah,10,1,5000,1,2",
        "Barre 57,2024-03-11 07:30:00,Supreme HQ,Mrigakshi,Jain,0,2,0,1,0",
        "Studio Back Body Blaze Express,2024-03-05 18:00:00,Kwality House,Anisha,Shah,4,0,1200.5,0.5,1",
        ",2024-03-05 18:00:00,Kwality House,,,99,0,0,0,0",
        "Studio Barre 57,bad date,Kwality House,Anisha,Shah,7,0,0,1,0",
    )


@pytest.fixture
def april_report():
    """Report continuing the Monday Barre 57 slot."""
    return make_csv(
        "studio barre 57,2024-04-01 07:30:00,Kwality House,Anisha,Shah,5,0,2500,1,0",
    )


@pytest.fixture
def payroll_archive(march_report, april_report):
    """Archive with two payroll reports and one unrelated entry."""
    return make_zip({
        "readme.txt": "not a report",
        f"{REPORT_PREFIX}-b.csv": april_report,
        f"{REPORT_PREFIX}-a.csv": march_report,
    })
