from typing import Tuple

from pydantic import BaseModel, ConfigDict


class MonitorEvent(BaseModel):
    """A single operation observed on the MONITOR feed."""

    model_config = ConfigDict(frozen=True)

    line: str
    timestamp: str
    database_index: int
    client_address: str
    command: str
    arguments: Tuple[str, ...] = ()

    @property
    def first_argument(self) -> str:
        return self.arguments[0] if self.arguments else ""
