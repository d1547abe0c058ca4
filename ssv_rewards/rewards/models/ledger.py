"""Running per-entity totals across processed rounds."""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .participation import OwnerParticipation, ValidatorParticipation


@dataclass
class LedgerEntry:
    """Lifetime totals of one validator or owner."""
    identity: str
    active_days: int
    reward: float
    owner_address: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'identity': self.identity,
            'owner_address': self.owner_address,
            'active_days': self.active_days,
            'reward': self.reward,
        }


class CumulativeLedger:
    """
    Keyed running totals with create-or-increment merge semantics.

    Entries are built from copied record values, so later changes to a
    round's participation records never reach the ledger.
    """

    def __init__(self):
        self._entries: Dict[str, LedgerEntry] = {}

    def add(self, identity: str, active_days: int, reward: float, owner_address: Optional[str] = None):
        """Add one round's contribution for an entity."""
        entry = self._entries.get(identity)
        if entry is None:
            self._entries[identity] = LedgerEntry(
                identity=identity,
                active_days=active_days,
                reward=reward,
                owner_address=owner_address,
            )
        else:
            entry.active_days += active_days
            entry.reward += reward

    def add_validators(self, participations: Iterable[ValidatorParticipation]):
        for p in participations:
            self.add(p.public_key, p.active_days, p.reward, owner_address=p.owner_address)

    def add_owners(self, participations: Iterable[OwnerParticipation]):
        for p in participations:
            self.add(p.owner_address, p.active_days, p.reward, owner_address=p.owner_address)

    def get(self, identity: str) -> Optional[LedgerEntry]:
        return self._entries.get(identity)

    def entries(self) -> List[LedgerEntry]:
        """Entries in first-seen order."""
        return list(self._entries.values())

    def rewards(self) -> Dict[str, float]:
        """Identity -> accumulated floating-point reward."""
        return {identity: entry.reward for identity, entry in self._entries.items()}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identity: str) -> bool:
        return identity in self._entries
