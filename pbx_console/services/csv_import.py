"""
Bulk user import from a phone-system CSV export

Expected columns: Number, FirstName, LastName, EmailAddress,
OutboundCallerID, DID. Only Number is required; other columns are ignored.
Fields are split on bare commas, quoted fields are not supported.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Set
import re
import uuid

from sqlmodel import Session, select
import structlog

from pbx_console.core.exceptions import CsvImportError
from pbx_console.models.user import IN_USE_STATUSES, User, UserStatus
from pbx_console.services.company_service import get_company
from pbx_console.services.persistence import commit, store_errors

logger = structlog.get_logger(__name__)

NUMBER_COLUMN = "Number"
OPTIONAL_COLUMNS = ("FirstName", "LastName", "EmailAddress", "OutboundCallerID", "DID")

EMPTY_FILE_MESSAGE = "CSV file seems to be empty."
MISSING_NUMBER_MESSAGE = "CSV must contain a 'Number' column."
NOTHING_TO_IMPORT_MESSAGE = "No new users to import (all extensions already exist)."
EXTENSION_RACE_MESSAGE = "Some extensions were taken while importing. Nothing was imported."

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass
class ImportResult:
    """Result of import execution"""
    inserted: int = 0
    skipped: int = 0
    message: str = ""


def split_lines(csv_text: str) -> List[str]:
    """Split on any line ending, trim, drop blank lines"""
    lines = (line.strip() for line in _LINE_BREAK.split(csv_text or ""))
    return [line for line in lines if line]


def map_header(header_line: str) -> Dict[str, int]:
    """
    Locate known columns by exact name.

    Returns column name -> index for every known column present. Raises
    CsvImportError when Number is missing.
    """
    header = header_line.split(",")
    columns: Dict[str, int] = {}
    for name in (NUMBER_COLUMN,) + OPTIONAL_COLUMNS:
        if name in header:
            columns[name] = header.index(name)

    if NUMBER_COLUMN not in columns:
        raise CsvImportError(MISSING_NUMBER_MESSAGE)
    return columns


def _cell(cols: List[str], columns: Dict[str, int], name: str) -> str:
    index = columns.get(name)
    if index is None or index >= len(cols):
        return ""
    return cols[index].strip()


def load_used_extensions(db: Session, company_id: uuid.UUID) -> Set[str]:
    """Extensions held by active or pending users of the company"""
    with store_errors(db, "load existing extensions"):
        extensions = db.exec(
            select(User.extension).where(
                User.company_id == company_id,
                User.status.in_(IN_USE_STATUSES),
            )
        ).all()
    return {ext for ext in extensions if ext}


def stage_rows(
    company_id: uuid.UUID,
    data_lines: List[str],
    columns: Dict[str, int],
    used_extensions: Set[str],
) -> List[User]:
    """
    Build the users to insert, in file order.

    Rows with no Number, or a Number already in used_extensions, are
    skipped. Each staged extension joins used_extensions so a repeat later
    in the same file is skipped as well.
    """
    staged: List[User] = []
    for line in data_lines:
        cols = line.split(",")

        extension = _cell(cols, columns, NUMBER_COLUMN)
        if not extension or extension in used_extensions:
            continue

        first_name = _cell(cols, columns, "FirstName")
        last_name = _cell(cols, columns, "LastName")
        name = f"{first_name} {last_name}".strip() if (first_name or last_name) else extension

        staged.append(
            User(
                company_id=company_id,
                name=name,
                extension=extension,
                email=_cell(cols, columns, "EmailAddress") or None,
                outbound_caller_id=_cell(cols, columns, "OutboundCallerID") or None,
                did=_cell(cols, columns, "DID") or None,
                status=UserStatus.ACTIVE,
            )
        )
        used_extensions.add(extension)

    return staged


def import_users_from_csv(
    db: Session,
    company_id: uuid.UUID,
    csv_text: Optional[str],
) -> ImportResult:
    """
    Import users from CSV text into a company.

    Existing extensions are skipped. Zero new rows is a successful no-op.
    The staged rows are inserted in one commit; a store failure fails the
    whole batch.
    """
    lines = split_lines(csv_text)
    if len(lines) < 2:
        raise CsvImportError(EMPTY_FILE_MESSAGE)

    columns = map_header(lines[0])
    get_company(db, company_id)

    used_extensions = load_used_extensions(db, company_id)
    data_lines = lines[1:]
    staged = stage_rows(company_id, data_lines, columns, used_extensions)
    skipped = len(data_lines) - len(staged)

    if not staged:
        logger.info(f"CSV import for company {company_id}: nothing new ({skipped} rows skipped)")
        return ImportResult(inserted=0, skipped=skipped, message=NOTHING_TO_IMPORT_MESSAGE)

    db.add_all(staged)
    commit(db, "insert imported users", lambda: CsvImportError(EXTENSION_RACE_MESSAGE))

    logger.info(f"CSV import for company {company_id}: {len(staged)} inserted, {skipped} skipped")
    return ImportResult(
        inserted=len(staged),
        skipped=skipped,
        message=f"Imported {len(staged)} users.",
    )
