"""Configuration for the Hub do Desenvolvedor client."""

from dataclasses import dataclass, field


@dataclass
class Config:
    # Auth token sent as the `token` query parameter on every request
    token: str = field(default="", repr=False)

    # Attach transport diagnostics to every response envelope
    debug: bool = True

    # Transport
    base_url: str = "https://ws.hubdodesenvolvedor.com.br/v2"
    connect_timeout: float = 180
    read_timeout: float = 180

    @property
    def timeout(self) -> tuple:
        return (self.connect_timeout, self.read_timeout)
