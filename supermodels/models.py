from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class App(BaseModel):
    """An application record, keyed by AppId. Field names are the stored JSON names."""

    # Stored records must carry JSON types that match exactly: no "11" or 12.0 for AppId.
    model_config = ConfigDict(strict=True)

    AppId: int = 0
    Commit: str = ""
    ContainerId: str = ""
    Env: dict[str, str] = Field(default_factory=dict)
    ImageId: str = ""

    @field_validator("Env", mode="before")
    @classmethod
    def _null_env(cls, v):
        # records written without an Env carry `null`
        return {} if v is None else v


def reset(app: App) -> App:
    """Put every field of `app` back to its default, in place."""
    for name, field in type(app).model_fields.items():
        setattr(app, name, field.get_default(call_default_factory=True))
    return app


def assign(app: App, src: App) -> App:
    """Copy every field of `src` onto `app`, in place."""
    for name in type(app).model_fields:
        setattr(app, name, getattr(src, name))
    return app
