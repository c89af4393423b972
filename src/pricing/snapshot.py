"""
Snapshot — внешние интерфейсы ядра и их in-memory реализация

EntityStore: чтение Token/Pair/Bundle по идентификатору. Отсутствующая
запись возвращается как None, никогда не как ошибка.

PairRegistry: поиск адреса пары по неупорядоченной паре токенов. Если пары
нет, возвращается ADDRESS_ZERO (sentinel), а не исключение.

InMemorySnapshot реализует оба протокола поверх неизменяемых словарей;
используется в тестах и при replay истории.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Final, Optional, Protocol

from src.core.domain import Bundle, Pair, Token, normalize_id

ADDRESS_ZERO: Final[str] = "0x0000000000000000000000000000000000000000"


# =============================================================================
# PROTOCOLS
# =============================================================================


class EntityStore(Protocol):
    """Чтение сущностей по идентификатору."""

    def get_token(self, token_id: str) -> Optional[Token]:
        ...

    def get_pair(self, pair_id: str) -> Optional[Pair]:
        ...

    def get_bundle(self, bundle_id: str) -> Optional[Bundle]:
        ...


class PairRegistry(Protocol):
    """Реестр пар фабрики."""

    def get_pair_address(self, token_a: str, token_b: str) -> str:
        """Адрес пары или ADDRESS_ZERO."""
        ...


# =============================================================================
# IN-MEMORY SNAPSHOT
# =============================================================================


class InMemorySnapshot:
    """
    Неизменяемый снапшот сущностей.

    Реализует EntityStore и PairRegistry. Реестр пар строится из переданных
    пар, ключ — frozenset двух адресов токенов. Если передан registry,
    он используется вместо автоматического (для пар, известных фабрике,
    но ещё не загруженных в хранилище).
    """

    def __init__(
        self,
        tokens: Iterable[Token] = (),
        pairs: Iterable[Pair] = (),
        bundle: Optional[Bundle] = None,
        registry: Optional[Mapping[tuple[str, str], str]] = None,
    ):
        """
        Инициализация снапшота.

        Args:
            tokens: Токены снапшота
            pairs: Пары снапшота
            bundle: Bundle (опционально; отсутствие — валидное состояние)
            registry: Явный реестр {(token_a, token_b): pair_id} (опционально)

        Raises:
            ValueError: Если идентификаторы дублируются
        """
        token_map: dict[str, Token] = {}
        for token in tokens:
            if token.id in token_map:
                raise ValueError(f"Duplicate token id in snapshot: {token.id}")
            token_map[token.id] = token

        pair_map: dict[str, Pair] = {}
        for pair in pairs:
            if pair.id in pair_map:
                raise ValueError(f"Duplicate pair id in snapshot: {pair.id}")
            pair_map[pair.id] = pair

        registry_map: dict[frozenset[str], str] = {}
        if registry is None:
            for pair in pair_map.values():
                registry_map[frozenset((pair.token0, pair.token1))] = pair.id
        else:
            for (token_a, token_b), pair_id in registry.items():
                key = frozenset((normalize_id(token_a), normalize_id(token_b)))
                registry_map[key] = normalize_id(pair_id)

        self._tokens = MappingProxyType(token_map)
        self._pairs = MappingProxyType(pair_map)
        self._registry = MappingProxyType(registry_map)
        self._bundle = bundle

    # EntityStore

    def get_token(self, token_id: str) -> Optional[Token]:
        return self._tokens.get(normalize_id(token_id))

    def get_pair(self, pair_id: str) -> Optional[Pair]:
        return self._pairs.get(normalize_id(pair_id))

    def get_bundle(self, bundle_id: str) -> Optional[Bundle]:
        if self._bundle is None or self._bundle.id != bundle_id:
            return None
        return self._bundle

    # PairRegistry

    def get_pair_address(self, token_a: str, token_b: str) -> str:
        token_a = normalize_id(token_a)
        token_b = normalize_id(token_b)
        if token_a == token_b:
            return ADDRESS_ZERO
        return self._registry.get(frozenset((token_a, token_b)), ADDRESS_ZERO)

    # Replay helpers

    def with_token(self, token: Token) -> "InMemorySnapshot":
        """Новый снапшот, в котором токен заменён/добавлен."""
        tokens = dict(self._tokens)
        tokens[token.id] = token
        return self._rebuild(tokens=tokens.values())

    def with_bundle(self, bundle: Bundle) -> "InMemorySnapshot":
        """Новый снапшот с заменённым bundle."""
        return self._rebuild(bundle=bundle)

    def _rebuild(
        self,
        tokens: Optional[Iterable[Token]] = None,
        bundle: Optional[Bundle] = None,
    ) -> "InMemorySnapshot":
        snapshot = InMemorySnapshot(
            tokens=self._tokens.values() if tokens is None else tokens,
            bundle=self._bundle if bundle is None else bundle,
        )
        snapshot._pairs = self._pairs
        snapshot._registry = self._registry
        return snapshot
