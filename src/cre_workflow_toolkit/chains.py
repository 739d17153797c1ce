"""Chain selectors supported by CRE workflows.

Selectors identify target chains in EVM capability configuration. The table is
static; it changes only with new platform releases.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from pydantic import BaseModel

from cre_workflow_toolkit.results import ToolResult


@dataclass(frozen=True, slots=True)
class ChainEntry:
    """A single supported chain."""

    name: str
    selector_name: str
    selector_id: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class ChainRecord(BaseModel):
    """Serialised form of a chain entry."""

    name: str
    selector_name: str
    selector_id: int

    @classmethod
    def from_entry(cls, entry: ChainEntry) -> ChainRecord:
        return cls(**entry.to_dict())


class ChainLookupResult(ToolResult):
    """A single chain found by `find_chain`."""

    name: str
    selector_name: str
    selector_id: int

    @classmethod
    def from_entry(cls, entry: ChainEntry) -> ChainLookupResult:
        return cls(**entry.to_dict())


class ChainListResult(ToolResult):
    chains: list[ChainRecord]


CHAINS: tuple[ChainEntry, ...] = (
    ChainEntry("Arbitrum One", "ethereum-mainnet-arbitrum-1", 4949039107694359620),
    ChainEntry("Arbitrum Sepolia", "ethereum-testnet-sepolia-arbitrum-1", 3478487238524512106),
    ChainEntry("Avalanche Mainnet", "avalanche-mainnet", 6433500567565415381),
    ChainEntry("Avalanche Fuji", "avalanche-testnet-fuji", 14767482510784806043),
    ChainEntry("Base Mainnet", "ethereum-mainnet-base-1", 15971525489660198786),
    ChainEntry("Base Sepolia", "ethereum-testnet-sepolia-base-1", 10344971235874465080),
    ChainEntry("BNB Chain Mainnet", "binance_smart_chain-mainnet", 11344663589394136015),
    ChainEntry("BNB Chain Testnet", "binance_smart_chain-testnet", 5142893604156789321),
    ChainEntry("Ethereum Mainnet", "ethereum-mainnet", 5009297550715157269),
    ChainEntry("Ethereum Sepolia", "ethereum-testnet-sepolia", 16015286601757825753),
    ChainEntry("OP Mainnet", "ethereum-mainnet-optimism-1", 3734403246176062136),
    ChainEntry("OP Sepolia", "ethereum-testnet-sepolia-optimism-1", 5224473277236331295),
    ChainEntry("Polygon Mainnet", "polygon-mainnet", 4051577828743386545),
    ChainEntry("Polygon Amoy", "polygon-testnet-amoy", 16281711391670634445),
)

_COLUMNS = (("Chain", 25), ("String Name", 40), ("Numeric ID", 25))


def find_chain(query: str) -> ChainEntry | None:
    """Look up a chain by selector name, display name or numeric selector id."""

    needle = query.strip()
    if not needle:
        return None

    for chain in CHAINS:
        if needle == chain.selector_name or needle == str(chain.selector_id):
            return chain

    lowered = needle.lower()
    for chain in CHAINS:
        if lowered in {chain.name.lower(), chain.selector_name.lower()}:
            return chain
    return None


def _row(values: tuple[str, str, str]) -> str:
    return " ".join(f"{v:<{width}}" for v, (_, width) in zip(values, _COLUMNS, strict=True))


def format_table(chains: tuple[ChainEntry, ...] = CHAINS) -> str:
    """Render the chains as a fixed-width text table."""

    header = (_COLUMNS[0][0], _COLUMNS[1][0], _COLUMNS[2][0])
    underline = ("-" * len(header[0]), "-" * len(header[1]), "-" * len(header[2]))
    lines = [_row(header), _row(underline)]
    lines.extend(_row((c.name, c.selector_name, str(c.selector_id))) for c in chains)
    return "\n".join(lines)
