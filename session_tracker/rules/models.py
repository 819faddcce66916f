from typing import Literal

from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str

class HeartbeatRules(BaseModel):
    interval_seconds: float = Field(default=30.0, gt=0)

class PageViewRules(BaseModel):
    min_duration_seconds: int = Field(default=1, ge=0)

class DispatchRules(BaseModel):
    mode: Literal["inline", "thread"] = "thread"
    max_workers: int = Field(default=1, ge=1)

class InternalUserRules(BaseModel):
    email_prefixes: list[str] = Field(default_factory=list)
    email_suffixes: list[str] = Field(default_factory=list)
    hostnames: list[str] = Field(default_factory=lambda: ["localhost"])

class StorageRules(BaseModel):
    db_path: str = "tracker.db"

class LoggingRules(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

class TrackerRules(BaseModel):
    project: ProjectRules
    enabled: bool = True
    heartbeat: HeartbeatRules = Field(default_factory=HeartbeatRules)
    page_views: PageViewRules = Field(default_factory=PageViewRules)
    dispatch: DispatchRules = Field(default_factory=DispatchRules)
    internal_users: InternalUserRules = Field(default_factory=InternalUserRules)
    storage: StorageRules = Field(default_factory=StorageRules)
    logging: LoggingRules = Field(default_factory=LoggingRules)
