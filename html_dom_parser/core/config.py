"""Configuration management for the HTML DOM parser."""

import os
from typing import Optional
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class ParserConfig(BaseModel):
    """HTML engine configuration."""

    recover: bool = Field(
        default=True,
        description="Recover from malformed markup instead of failing"
    )
    remove_comments: bool = Field(
        default=False,
        description="Drop comment nodes while parsing"
    )
    remove_pis: bool = Field(
        default=False,
        description="Drop processing instructions while parsing"
    )
    no_network: bool = Field(
        default=True,
        description="Forbid network access when resolving external resources"
    )
    register_node_ns: bool = Field(
        default=True,
        description="Register the context node namespaces for XPath queries by default"
    )

    @classmethod
    def from_env(cls) -> "ParserConfig":
        """Create config from environment variables."""
        return cls(
            recover=_env_flag("HTMLDOM_RECOVER", "true"),
            remove_comments=_env_flag("HTMLDOM_REMOVE_COMMENTS", "false"),
            remove_pis=_env_flag("HTMLDOM_REMOVE_PIS", "false"),
            no_network=_env_flag("HTMLDOM_NO_NETWORK", "true"),
            register_node_ns=_env_flag("HTMLDOM_REGISTER_NODE_NS", "true"),
        )


class Config(BaseModel):
    """Main configuration container."""

    parser: ParserConfig = Field(default_factory=ParserConfig.from_env)

    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Log file path"
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON formatted logs"
    )

    @classmethod
    def from_env(cls) -> "Config":
        """Create complete config from environment variables."""
        return cls(
            parser=ParserConfig.from_env(),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE"),
            json_logs=_env_flag("LOG_JSON", "false"),
        )
