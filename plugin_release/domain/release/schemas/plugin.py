from pydantic import BaseModel, ConfigDict


class FramerJson(BaseModel):
    """framer.json 매니페스트"""

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    name: str = ""
    modes: list[str] = []
    icon: str | None = None


class PluginPackageJson(BaseModel):
    """플러그인 package.json 중 필요한 필드"""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    version: str | None = None


class PluginInfo(BaseModel):
    """릴리스 대상 플러그인 정보"""

    id: str
    name: str
    workspace_name: str
    path: str
    zip_path: str
