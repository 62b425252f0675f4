from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, AliasChoices, model_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = Field(default="Caderninho Financeiro API", validation_alias=AliasChoices("CADERNINHO_APP_NAME","APP_NAME"))
    ENV: str = Field(default="lab", validation_alias=AliasChoices("CADERNINHO_ENV","ENV"))  # lab|prod
    DATABASE_URL: str = Field(default="sqlite:///./caderninho.db", validation_alias=AliasChoices("CADERNINHO_DATABASE_URL","DATABASE_URL"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("CADERNINHO_LOG_LEVEL","LOG_LEVEL"))

    # Auth (JWT) - desligado por padrão
    AUTH_ENABLED: bool = Field(default=False, validation_alias=AliasChoices("CADERNINHO_AUTH_ENABLED","AUTH_ENABLED"))
    AUTH_JWT_SECRET: str = Field(default="", validation_alias=AliasChoices("CADERNINHO_AUTH_JWT_SECRET","AUTH_JWT_SECRET","JWT_SECRET"))
    AUTH_JWT_TTL_MIN: int = Field(default=60, validation_alias=AliasChoices("CADERNINHO_AUTH_JWT_TTL_MIN","AUTH_JWT_TTL_MIN"))
    AUTH_PROTECT_DOCS: bool = Field(default=False, validation_alias=AliasChoices("CADERNINHO_AUTH_PROTECT_DOCS","AUTH_PROTECT_DOCS"))

    # Parcelas de cartão vencem sempre neste dia do mês
    INSTALLMENT_DUE_DAY: int = Field(default=15, ge=1, le=28, validation_alias=AliasChoices("CADERNINHO_INSTALLMENT_DUE_DAY","INSTALLMENT_DUE_DAY"))

    @model_validator(mode="after")
    def _security_invariants(self):
        # Fail-fast de segurança (contrato de settings)
        if self.ENV == "prod" and not self.AUTH_ENABLED:
            raise ValueError("SECURITY: ENV=prod requer AUTH_ENABLED=true (failsafe)")

        if self.AUTH_ENABLED:
            sec = (self.AUTH_JWT_SECRET or "").strip()
            if not sec:
                raise ValueError("SECURITY: AUTH_JWT_SECRET vazio (obrigatório quando AUTH_ENABLED=true)")
            if len(sec) < 32:
                raise ValueError("SECURITY: AUTH_JWT_SECRET curto (min 32 chars)")
            # normaliza (remove espaços acidentais)
            self.AUTH_JWT_SECRET = sec

        return self

settings = Settings()
