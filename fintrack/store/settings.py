"""Settings store: budget cap and currency rate table."""

import json
from collections.abc import Mapping

from fintrack.domain.models import BASE_CURRENCY, Settings, parse_money
from fintrack.domain.validation import validate_budget_cap, validate_currency_code, validate_currency_rate
from fintrack.exceptions import SettingsValidationError, StorageError
from fintrack.logging_setup import get_logger
from fintrack.store.storage import SETTINGS_KEY, KeyValueStorage

logger = get_logger(__name__)


def load_settings(storage: KeyValueStorage) -> Settings:
    """Read persisted settings, or defaults if none are stored.

    Raises:
        StorageError: If the stored value cannot be decoded.
    """
    raw = storage.get(SETTINGS_KEY)
    if raw is None:
        return Settings()
    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        return Settings.from_dict(data)
    except (ValueError, TypeError, AttributeError) as e:
        raise StorageError(f"Stored settings are corrupt: {e}") from e


class SettingsStore:
    """Singleton settings record mirrored to durable storage."""

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage
        self._settings = load_settings(storage)

    def get(self) -> Settings:
        """Return a copy of the current settings."""
        return Settings(budget_cap=self._settings.budget_cap, currencies=dict(self._settings.currencies))

    def _commit(self, settings: Settings) -> Settings:
        try:
            self._storage.set(SETTINGS_KEY, json.dumps(settings.to_dict()))
        except StorageError:
            logger.error("Persisting settings failed; keeping previous settings")
            raise
        self._settings = settings
        return self.get()

    def update_budget_cap(self, value: str) -> Settings:
        """Set the budget cap from raw input such as "750.00".

        Raises:
            SettingsValidationError: If the value is not a valid budget cap.
            StorageError: If persisting fails. Settings are unchanged.
        """
        result = validate_budget_cap(value)
        if not result.is_valid:
            raise SettingsValidationError({"budget_cap": result.error})

        updated = self._commit(Settings(budget_cap=parse_money(value), currencies=dict(self._settings.currencies)))
        logger.info("Budget cap updated: %s", value)
        return updated

    def update_currencies(self, rates: Mapping[str, str]) -> Settings:
        """Merge exchange rates into the rate table.

        The base currency always keeps a rate of 1.0.

        Args:
            rates: Mapping of currency code to raw rate, e.g. {"EUR": "0.85"}.

        Raises:
            SettingsValidationError: If any code or rate is invalid. Nothing is changed.
            StorageError: If persisting fails. Settings are unchanged.
        """
        errors: dict[str, str] = {}
        for code, rate in rates.items():
            code_result = validate_currency_code(code)
            if not code_result.is_valid:
                errors[code] = code_result.error
                continue
            rate_result = validate_currency_rate(rate)
            if not rate_result.is_valid:
                errors[code] = rate_result.error
            elif code == BASE_CURRENCY and float(rate) != 1.0:
                errors[code] = f"{BASE_CURRENCY} is the base currency and must stay at 1"
        if errors:
            raise SettingsValidationError(errors)

        currencies = dict(self._settings.currencies)
        currencies.update({code: float(rate) for code, rate in rates.items()})
        currencies[BASE_CURRENCY] = 1.0

        updated = self._commit(Settings(budget_cap=self._settings.budget_cap, currencies=currencies))
        logger.info("Currency rates updated: %s", ", ".join(sorted(rates)))
        return updated

    def reset(self) -> Settings:
        """Restore default settings."""
        updated = self._commit(Settings())
        logger.info("Settings reset to defaults")
        return updated
