import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    # Data files
    data_dir: str = field(default_factory=lambda: os.getenv("BOOKLEND_DATA_DIR", "Data"))
    catalog_file: str = field(default_factory=lambda: os.getenv("BOOKLEND_CATALOG_FILE", "libros.json"))
    ledger_file: str = field(default_factory=lambda: os.getenv("BOOKLEND_LEDGER_FILE", "prestamos.json"))

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("BOOKLEND_LOG_LEVEL", "WARNING"))

    # Application
    app_name: str = field(default_factory=lambda: os.getenv("APP_NAME", "Library Manager"))

    @property
    def catalog_path(self) -> Path:
        return Path(self.data_dir) / self.catalog_file

    @property
    def ledger_path(self) -> Path:
        return Path(self.data_dir) / self.ledger_file


def configure_logging(settings: "Settings") -> None:
    level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

