from dataclasses import dataclass
from pathlib import Path


@dataclass
class RouteResult:
    route: str
    path: Path
    size: int

    def relative_to(self, out_dir: Path) -> str:
        return self.path.relative_to(out_dir).as_posix()

__all__ = ["RouteResult"]
