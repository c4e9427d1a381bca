import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional


@dataclass
class ModelConfig:
    penalty_factor: float = 2.0
    random_seed: int = 123
    db_path: Optional[str] = None

    def __post_init__(self):
        self.penalty_factor = float(self.penalty_factor)
        if self.penalty_factor < 1.0:
            raise ValueError(f"penalty_factor must be >= 1, got {self.penalty_factor}")
        self.random_seed = int(self.random_seed)


def load_config(path: Path) -> ModelConfig:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("Config file must contain a JSON object.")
    known = {f.name for f in fields(ModelConfig)}
    unknown = sorted(set(payload) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    return ModelConfig(**payload)
