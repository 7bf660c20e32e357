from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExpandConfig(BaseModel):
    """
    Naming conventions shared by both expansions.

    Defaults describe the layout:
      <root>/src/pages/**/<name>.py  ->  pages.<dirs>.<name>.page
    and a bootstrap of the form HttpServer.new(lambda: App.new()...).
    """

    model_config = ConfigDict(frozen=True)

    root: Path = Field(default_factory=Path.cwd)
    pages_dir: str = "src/pages"
    extension: str = ".py"

    index_marker: str = "index"
    module_markers: tuple[str, ...] = ("mod", "__init__")
    root_symbol: str = "pages"
    handler_symbol: str = "page"

    # bootstrap call: <...>.HttpServer.<...>.new(lambda: ...)
    factory_name: str = "HttpServer"
    constructor_name: str = "new"
    framework: str = "web"

    main_markers: tuple[str, ...] = ("ruxt.main", "main")
    route_markers: tuple[str, ...] = ("ruxt.route", "route")
    runtime_decorator: Optional[str] = None

    layout_param: str = "layout"
    layout_container: str = "web.Data"
    layout_type: str = "ruxt.Layout"

    @field_validator("extension")
    @classmethod
    def _leading_dot(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("extension must not be empty")
        return v if v.startswith(".") else f".{v}"

    @property
    def pages_path(self) -> Path:
        return Path(self.root) / self.pages_dir
