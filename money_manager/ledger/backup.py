"""
Backup Export / Import

The wire format is the state document itself, as camelCase JSON:
    {accounts, transactions, emis, customPresets, theme}

DESIGN DECISION: Import is all-or-nothing. It builds a brand-new document
and never touches the current one, so a rejected payload leaves the
caller's state exactly as it was.

Leniency for older backups:
- `emis` / `customPresets` may be missing (become empty)
- transactions may lack `category` (becomes "Other")
Strictness:
- `accounts` and `transactions` must be present and be lists
- every record must validate, otherwise the whole payload is rejected
"""

import json
from datetime import date
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from money_manager.config import get_settings
from money_manager.ledger.engine import LedgerError
from money_manager.models.ledger import LedgerState


class MalformedImportError(LedgerError):
    """The backup payload could not be turned into a ledger document."""
    pass


def export_state(state: LedgerState) -> str:
    """Serialize the whole document for backup."""
    return state.model_dump_json(by_alias=True, exclude_none=True, indent=2)


def _optional_list(data: Mapping[str, Any], key: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedImportError(f"Invalid backup file format: '{key}' must be a list.")
    return value


def import_state(
    current: LedgerState,
    payload: Union[str, bytes, Mapping[str, Any]],
) -> LedgerState:
    """
    Build a new document from a backup payload.

    The current theme is kept; the imported one is ignored.

    Raises:
        MalformedImportError: payload is not JSON, lacks the required
            sequences, or contains a record that fails validation
    """
    if isinstance(payload, (str, bytes, bytearray)):
        try:
            data = json.loads(payload)
        except ValueError as e:
            raise MalformedImportError("Error parsing backup file.") from e
    else:
        data = payload

    if not isinstance(data, Mapping):
        raise MalformedImportError("Invalid backup file format.")

    accounts = data.get("accounts")
    transactions = data.get("transactions")
    if not isinstance(accounts, list) or not isinstance(transactions, list):
        raise MalformedImportError(
            "Invalid backup file format: 'accounts' and 'transactions' must be lists."
        )

    try:
        return LedgerState(
            accounts=accounts,
            transactions=transactions,
            emis=_optional_list(data, "emis"),
            custom_presets=_optional_list(data, "customPresets"),
            theme=current.theme,
        )
    except ValidationError as e:
        raise MalformedImportError(
            f"Backup contains invalid records ({e.error_count()} errors)."
        ) from e


def backup_filename(today: Optional[date] = None, prefix: Optional[str] = None) -> str:
    """e.g. money_manager_backup_2024-12-31.json"""
    today = today or date.today()
    prefix = prefix or get_settings().ledger.backup_filename_prefix
    return f"{prefix}_{today.isoformat()}.json"
