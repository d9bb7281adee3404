"""
Export Service - Spreadsheet export of the filtered registration list.
"""
import io
import logging
from datetime import date
from typing import Iterable

import pandas as pd

from core.models.entities import Registration
from utils.formatters import format_short_date

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "Customer ID", "Name", "Category", "Mobile", "Panchayath", "Ward",
    "Address", "Agent Details", "Status", "Fee Amount", "Registration Date",
]

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def registrations_to_frame(registrations: Iterable[Registration]) -> pd.DataFrame:
    rows = [{
        "Customer ID": r.customer_id,
        "Name": r.name,
        "Category": r.category,
        "Mobile": r.mobile,
        "Panchayath": r.panchayath,
        "Ward": r.ward,
        "Address": r.address,
        "Agent Details": r.agent_details or "",
        "Status": r.status.value,
        "Fee Amount": float(r.fee_amount),
        "Registration Date": format_short_date(r.created_at),
    } for r in registrations]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_filename(on: date = None) -> str:
    return f"registrations_{(on or date.today()).isoformat()}.xlsx"


def export_registrations(registrations: Iterable[Registration]) -> bytes:
    """Serialize registrations to xlsx bytes for st.download_button"""
    frame = registrations_to_frame(registrations)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        frame.to_excel(writer, index=False, sheet_name="Registrations")
    logger.info(f"Exported {len(frame)} registrations")
    return buffer.getvalue()
