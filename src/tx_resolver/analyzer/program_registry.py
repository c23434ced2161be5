from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProgramInfo:
    """已知 Solana 程序"""
    name: str
    action: str


SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
ASSOCIATED_TOKEN_PROGRAM_ID = "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
SERUM_DEX_PROGRAM_ID = "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"
JUPITER_PROGRAM_ID = "JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4"
SOLEND_PROGRAM_ID = "So1endDq2YkqhipRh3WViPa8hdiSpxWy6z3Z6tMCpAo"

# program id -> 程序信息，可以扩展
KNOWN_PROGRAMS: dict[str, ProgramInfo] = {
    SYSTEM_PROGRAM_ID: ProgramInfo("System Program", "System Operation (SOL Transfer or Account Creation)"),
    TOKEN_PROGRAM_ID: ProgramInfo("SPL Token Program", "Token Transfer"),
    ASSOCIATED_TOKEN_PROGRAM_ID: ProgramInfo("Associated Token Account Program", "Token Account Creation"),
    SERUM_DEX_PROGRAM_ID: ProgramInfo("Serum DEX Program", "DEX Trade on Serum"),
    JUPITER_PROGRAM_ID: ProgramInfo("Jupiter Aggregator", "Token Swap via Jupiter"),
    SOLEND_PROGRAM_ID: ProgramInfo("Solend Protocol", "DeFi Operation on Solend"),
}

UNKNOWN_PROGRAM_ACTION = "Program Interaction"
