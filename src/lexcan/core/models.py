from pydantic import BaseModel, ConfigDict


class LexModel(BaseModel):
    """Base class for all Lex models.

    Records are built once per source file and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)
