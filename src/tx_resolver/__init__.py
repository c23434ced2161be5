from .classifier import EvmHash, SolanaSignature, InvalidIdentifier, classify, extract_tx_identifier
from .config import Settings, get_settings
from .exceptions import (
    TxResolverError,
    InvalidFormatError,
    TransactionNotFoundError,
    ChainProbeError,
    NormalizationError,
)
from .fetcher import MultiChainFetcher, FetchOutcome, ProbeResult
from .registry import ChainConfig, ChainRegistry, NativeCurrency, DEFAULT_CHAINS, build_registry
from .resolver import TxResolver, resolve_and_analyze
from .schemas import EvmTransaction, SolanaTransaction, TransactionData
from .analyzer import AnalysisEngine, TransactionAnalysis

__version__ = "0.1.0"

__all__ = [
    "EvmHash",
    "SolanaSignature",
    "InvalidIdentifier",
    "classify",
    "extract_tx_identifier",
    "Settings",
    "get_settings",
    "TxResolverError",
    "InvalidFormatError",
    "TransactionNotFoundError",
    "ChainProbeError",
    "NormalizationError",
    "MultiChainFetcher",
    "FetchOutcome",
    "ProbeResult",
    "ChainConfig",
    "ChainRegistry",
    "NativeCurrency",
    "DEFAULT_CHAINS",
    "build_registry",
    "TxResolver",
    "resolve_and_analyze",
    "EvmTransaction",
    "SolanaTransaction",
    "TransactionData",
    "AnalysisEngine",
    "TransactionAnalysis",
]
