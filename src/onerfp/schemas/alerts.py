"""Grant alert run summary."""

from pydantic import BaseModel, ConfigDict


class AlertRunResult(BaseModel):
    grants_found: int
    subscribers: int
    emails_sent: int
    failures: int

    model_config = ConfigDict(from_attributes=True)
