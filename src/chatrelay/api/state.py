"""Process-wide relay state, built once per app and shared by all handlers.

One RelayState per process. Several deployed instances each hold their
own independent counters, last chat, config and knowledge.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fastapi import Request

from chatrelay.chatguru.models import LastChat
from chatrelay.chatguru.sender import ChatGuruGateway
from chatrelay.domain.counters import Counters
from chatrelay.infra.audit_log import AuditLog
from chatrelay.infra.config_store import ConfigStore
from chatrelay.infra.knowledge_store import KnowledgeStore
from chatrelay.infra.settings import Settings


@dataclass
class RelayState:
    """Everything a request handler may read or mutate."""

    settings: Settings
    config: ConfigStore
    knowledge: KnowledgeStore
    audit_log: AuditLog
    counters: Counters = field(default_factory=Counters)
    last_chat: LastChat | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> RelayState:
        return cls(
            settings=settings,
            config=ConfigStore(settings.config_path),
            knowledge=KnowledgeStore(settings.knowledge_path),
            audit_log=AuditLog(settings.events_path),
        )

    def gateway(self) -> ChatGuruGateway:
        return ChatGuruGateway(self.settings.provider, self.counters, self.audit_log)


def get_state(request: Request) -> RelayState:
    """FastAPI dependency: the RelayState attached by the app factory."""
    return request.app.state.relay
