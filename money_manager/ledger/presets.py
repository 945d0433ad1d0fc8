"""
Category Presets

Two fixed built-in sets (expense and income) plus the user's own
custom presets, which live in the state document.
"""

from money_manager.ledger.engine import PreconditionError
from money_manager.models.ledger import LedgerState, Preset, TransactionType


DEFAULT_EXPENSE_PRESETS: tuple[Preset, ...] = (
    Preset(name="Food", icon="fast-food-outline", type=TransactionType.EXPENSE),
    Preset(name="Transport", icon="car-outline", type=TransactionType.EXPENSE),
    Preset(name="Shopping", icon="bag-handle-outline", type=TransactionType.EXPENSE),
    Preset(name="Bills", icon="receipt-outline", type=TransactionType.EXPENSE),
    Preset(name="Rent", icon="home-outline", type=TransactionType.EXPENSE),
    Preset(name="Health", icon="medkit-outline", type=TransactionType.EXPENSE),
    Preset(name="Entertainment", icon="film-outline", type=TransactionType.EXPENSE),
    Preset(name="Other", icon="ellipsis-horizontal-outline", type=TransactionType.EXPENSE),
)

DEFAULT_INCOME_PRESETS: tuple[Preset, ...] = (
    Preset(name="Salary", icon="briefcase-outline", type=TransactionType.INCOME),
    Preset(name="Freelance", icon="laptop-outline", type=TransactionType.INCOME),
    Preset(name="Interest", icon="trending-up-outline", type=TransactionType.INCOME),
    Preset(name="Gift", icon="gift-outline", type=TransactionType.INCOME),
    Preset(name="Refund", icon="return-down-back-outline", type=TransactionType.INCOME),
    Preset(name="Other", icon="ellipsis-horizontal-outline", type=TransactionType.INCOME),
)


def builtin_presets(preset_type: TransactionType) -> list[Preset]:
    defaults = (
        DEFAULT_INCOME_PRESETS
        if preset_type == TransactionType.INCOME
        else DEFAULT_EXPENSE_PRESETS
    )
    return [p.model_copy() for p in defaults]


def available_presets(state: LedgerState, preset_type: TransactionType) -> list[Preset]:
    """Built-in presets for the type, followed by the matching custom ones."""
    custom = [p for p in state.custom_presets if p.type == preset_type]
    return builtin_presets(preset_type) + custom


def add_custom_preset(state: LedgerState, preset: Preset) -> Preset:
    """
    Add a custom preset.

    Names are unique per type, case-insensitively, across built-in and
    custom presets alike.
    """
    wanted = preset.name.casefold()
    if any(p.name.casefold() == wanted for p in available_presets(state, preset.type)):
        raise PreconditionError(
            f"A {preset.type.value} preset named '{preset.name}' already exists."
        )

    state.custom_presets.append(preset)
    return preset


def delete_custom_preset(
    state: LedgerState,
    name: str,
    preset_type: TransactionType,
) -> None:
    """Remove a custom preset. Built-in presets are not stored, so never removed."""
    wanted = name.casefold()
    state.custom_presets = [
        p for p in state.custom_presets
        if not (p.type == preset_type and p.name.casefold() == wanted)
    ]
