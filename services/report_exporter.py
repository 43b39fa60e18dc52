import csv
import io
from typing import List, Optional
from models.internal import Lead

CSV_HEADERS = [
    "Company Name",
    "Sector",
    "Key Contact",
    "Contact Number",
    "Company Website",
    "Contact Email",
    "Digital Status",
    "Generated Email",
]

UTF8_BOM = "\ufeff"


def _cell(value: Optional[str]) -> str:
    return "" if value is None else str(value)


def lead_row(lead: Lead) -> List[str]:
    r = lead.report
    return [
        _cell(r.company_name),
        _cell(r.business_sector),
        _cell(r.key_contact),
        _cell(r.contact_number),
        _cell(r.company_website),
        _cell(r.email_contact),
        _cell(r.digital_status),
        _cell(lead.email),
    ]


def export_csv(leads: List[Lead]) -> str:
    """Every cell quoted, quotes doubled, BOM-prefixed so spreadsheets detect UTF-8."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for lead in leads:
        writer.writerow(lead_row(lead))
    return UTF8_BOM + buf.getvalue()
