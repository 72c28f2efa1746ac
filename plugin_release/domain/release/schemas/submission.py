from pydantic import BaseModel, ConfigDict, Field, field_validator


class SubmissionResponse(BaseModel):
    """마켓플레이스 버전 제출 응답

    서버 버전에 따라 version이 문자열 또는 숫자로 오고,
    versionId 등은 생략될 수 있다.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    version: str | None = None
    version_id: str | None = Field(default=None, alias="versionId")
    plugin_id: str | None = Field(default=None, alias="pluginId")
    slug: str | None = None

    @field_validator("version", "version_id", "plugin_id", mode="before")
    @classmethod
    def coerce_to_str(cls, value: object) -> object:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return str(value)
        return value
