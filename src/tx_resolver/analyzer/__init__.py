from .engine import AnalysisEngine
from .behavior_analyzer import BehaviorAnalyzer
from .event_classifier import EventClassifier, EVENT_SIGNATURES
from .risk_detector import RiskDetector
from .program_registry import KNOWN_PROGRAMS, ProgramInfo
from .formatting import format_units, format_gwei, total_gas_cost, format_lamports, format_address
from .schemas import (
    TransactionAnalysis,
    BehaviorResult,
    RiskFlag,
    GasInfo,
)

__all__ = [
    "AnalysisEngine",
    "BehaviorAnalyzer",
    "EventClassifier",
    "EVENT_SIGNATURES",
    "RiskDetector",
    "KNOWN_PROGRAMS",
    "ProgramInfo",
    "format_units",
    "format_gwei",
    "total_gas_cost",
    "format_lamports",
    "format_address",
    "TransactionAnalysis",
    "BehaviorResult",
    "RiskFlag",
    "GasInfo",
]
