"""Application settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Resolved once per process (see ``get_container``) and passed down to
    the DAOs and clients that need them.
    """

    # AWS
    aws_region: str = "us-east-1"
    environment: str = "development"

    # Observability
    service_name: str = "nft-monitor"
    log_level: str = "INFO"
    metrics_namespace: str = "NFTMonitor"

    # DynamoDB
    # Points the DAOs at DynamoDB Local / LocalStack when set
    dynamodb_endpoint: str | None = None
    nft_events_table: str = "NFTEvents"
    parameters_table: str = "Parameters"

    # Chain
    rpc_url: str = "http://localhost:8545"
    contract_address: str = ""
    # First block scanned when lastBlockChecked has never been stored
    from_block: int = 0

    # Authorizer
    # Placeholder until JWT claim verification is wired in
    authorizer_token: str = "allow"

    class Config:
        env_prefix = "NFT_MONITOR_"
        env_file = ".env"
