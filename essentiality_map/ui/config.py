from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from essentiality_map.config.model import GlobalConfig
from essentiality_map.services.query_client import OpenTargetsClient


@dataclass
class AppConfig:
    """
    Holds shared services for the Dash app: config root, global config and the
    query client. This is passed into layout + callback registration
    functions instead of using module-level globals.

    Per-user view state never lives here; it is kept in the browser dcc.Store.
    """
    config_root: Path
    global_config: GlobalConfig
    query_client: Optional[OpenTargetsClient] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.query_client is None:
            raise RuntimeError("AppConfig.query_client must be initialized.")
