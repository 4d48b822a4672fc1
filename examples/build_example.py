"""Example script showing how to run the registry build programmatically."""
from __future__ import annotations

from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from registry import BuildConfig, RegistryBuilder  # type: ignore  # noqa: E402
from registry.report import print_report  # type: ignore  # noqa: E402
from utils.config import load_config  # type: ignore  # noqa: E402


def main() -> None:
    root = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd()
    config = BuildConfig.from_app_config(load_config(root / "registry.yml"), root, strict=False, write=False)
    report = RegistryBuilder().build(config)
    print_report(report)
    if report.document is not None:
        for entry in report.document.items:
            print(entry.name, entry.type)


if __name__ == "__main__":
    main()
