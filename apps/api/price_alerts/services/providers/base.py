from __future__ import annotations

from abc import ABC, abstractmethod


class PriceProvider(ABC):
    name: str

    @abstractmethod
    async def get_price(self, symbol: str) -> float:
        raise NotImplementedError
