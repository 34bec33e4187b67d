"""
Справочник аптек.
"""

import logging
from typing import Iterable, Optional

from app.models.request import Pharmacy

logger = logging.getLogger(__name__)


class PharmacyDirectory:
    """
    Справочник аптек с поиском по точному совпадению идентификатора.
    """

    def __init__(self, pharmacies: Iterable[Pharmacy]):
        self._pharmacies: dict[str, Pharmacy] = {}
        for pharmacy in pharmacies:
            if pharmacy.id in self._pharmacies:
                logger.warning(
                    f"Duplicate pharmacy id '{pharmacy.id}' in directory, keeping the first entry."
                )
                continue
            self._pharmacies[pharmacy.id] = pharmacy

    def get_all(self) -> list[Pharmacy]:
        return list(self._pharmacies.values())

    def get_by_id(self, pharmacy_id: str) -> Optional[Pharmacy]:
        return self._pharmacies.get(pharmacy_id)

    def find_by_address(self, address: str) -> Optional[Pharmacy]:
        """Ищет аптеку по адресу (используется при выборе кнопкой в диалоге)."""
        for pharmacy in self._pharmacies.values():
            if pharmacy.address == address:
                return pharmacy
        return None
