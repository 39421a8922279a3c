"""ChatGuru message models."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class LastChat:
    """Identity of the most recent inbound chat seen on the webhook.

    ATTENTION PII: `celular`, `nome` and `texto_mensagem` are personal data.
    Keep them in memory and the audit log only. NEVER log them.
    """

    updated_at: str
    celular: str
    chat_id: str | None = None
    nome: str | None = None
    phone_id: str | None = None
    origem: str | None = None
    texto_mensagem: str | None = None

    def to_dict(self) -> dict[str, Any]:
        # Wire names follow the provider payload, except updatedAt
        return {
            "updatedAt": self.updated_at,
            "celular": self.celular,
            "chat_id": self.chat_id,
            "nome": self.nome,
            "phone_id": self.phone_id,
            "origem": self.origem,
            "texto_mensagem": self.texto_mensagem,
        }


@dataclass(frozen=True)
class SendRequest:
    """One outbound message to the provider."""

    chat_number: str
    text: str
    send_date: str | None = None
