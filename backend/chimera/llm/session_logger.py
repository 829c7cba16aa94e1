"""
Per-game turn logger.

Creates a human-readable log file for each game with clearly separated
model interactions. Disabled unless CHIMERA_TURN_LOG_DIR is set.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path


class SessionLogger:
    """Logs model interactions for one game to a dedicated file."""

    def __init__(self, game_id: str, logs_dir: Path):
        self.game_id = game_id
        self.logs_dir = Path(logs_dir)
        self.interaction_count = 0
        self.log_file: Path | None = None

    def _ensure_log_file(self) -> Path:
        """Create the log file on first interaction."""
        if self.log_file is None:
            self.logs_dir.mkdir(parents=True, exist_ok=True)

            started = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            self.log_file = self.logs_dir / f"{started}_{self.game_id}.log"

            with open(self.log_file, "w", encoding="utf-8") as f:
                f.write("Project Chimera Game Log\n")
                f.write("========================\n")
                f.write(f"Game ID: {self.game_id}\n")
                f.write(f"Started: {datetime.now().isoformat()}\n")
                f.write("\n")

        return self.log_file

    def log_turn(
        self,
        action: str,
        prompt: str,
        raw_response: str,
        model: str,
        state_updated: bool = False,
    ) -> Path:
        """Append one turn (action, full prompt, model reply) to the game log."""
        log_file = self._ensure_log_file()
        self.interaction_count += 1

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

        with open(log_file, "a", encoding="utf-8") as f:
            f.write("═" * 70 + "\n")
            f.write(f"TURN #{self.interaction_count} | {timestamp} | {model}\n")
            f.write("═" * 70 + "\n\n")

            f.write("─── PLAYER ACTION ───\n")
            f.write(f'"{action}"\n\n')

            f.write("─── PROMPT ───\n")
            f.write(prompt)
            f.write("\n\n")

            f.write("─── RAW RESPONSE ───\n")
            f.write(raw_response or "(empty)")
            f.write("\n\n")

            if state_updated:
                f.write("─── GAME STATE REPLACED FROM RESPONSE ───\n\n")

        return log_file


# One logger per game so turn numbering continues within a process
_loggers: dict[str, SessionLogger] = {}


def get_session_logger(game_id: str, logs_dir: Path) -> SessionLogger:
    """Get (or create) the logger for a game."""
    logger = _loggers.get(game_id)
    if logger is None or logger.logs_dir != Path(logs_dir):
        logger = SessionLogger(game_id, logs_dir)
        _loggers[game_id] = logger
    return logger
