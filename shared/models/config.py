from pydantic import BaseModel


class EnvConfig(BaseModel):
    """
    A single environment setting a client needs before it can boot.

    Attributes:
        env_key (str): Key without the "<TYPE>_<ENGINE>_" prefix, e.g. "BASE_URL".
        val_type (str): "string", "number", "bool" or "list".
        default (str | int | float | bool | list | None): Used when the variable is unset.
            None marks the setting as required.
    """

    env_key: str
    val_type: str = "string"
    default: str | int | float | bool | list | None = None
