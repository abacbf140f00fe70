"""API Gateway TOKEN authorizer Lambda Handler.

The token check compares against a configured stand-in value. It has to be
replaced by JWT claim verification before exposing the API publicly.
"""

from typing import Any

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import event_source
from aws_lambda_powertools.utilities.data_classes.api_gateway_authorizer_event import (
    APIGatewayAuthorizerTokenEvent,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from ...infrastructure.config import Settings

settings = Settings()
logger = Logger(service=settings.service_name, level=settings.log_level)

POLICY_VERSION = "2012-10-17"
PRINCIPAL_ID = "user"


def generate_policy_document(effect: str, resource: str) -> dict[str, Any]:
    return {
        "Version": POLICY_VERSION,
        "Statement": [
            {
                "Action": "execute-api:Invoke",
                "Effect": effect,
                "Resource": resource,
            }
        ],
    }


def generate_auth_response(principal_id: str, effect: str, resource: str) -> dict[str, Any]:
    return {
        "principalId": principal_id,
        "policyDocument": generate_policy_document(effect, resource),
    }


DENY_ALL_POLICY = generate_auth_response(PRINCIPAL_ID, "Deny", "*")


def authorize(token: str, method_arn: str, settings: Settings | None = None) -> dict[str, Any]:
    """Allow ``method_arn`` for the expected token, deny everything otherwise."""
    settings = settings or Settings()
    token = token.removeprefix("Bearer ").strip()

    if token and token == settings.authorizer_token:
        return generate_auth_response(PRINCIPAL_ID, "Allow", method_arn)
    return DENY_ALL_POLICY


@logger.inject_lambda_context
@event_source(data_class=APIGatewayAuthorizerTokenEvent)
def handler(event: APIGatewayAuthorizerTokenEvent, context: LambdaContext) -> dict[str, Any]:
    """Lambda handler entry point."""
    response = authorize(event.authorization_token or "", event.method_arn)
    logger.info(
        "Authorization decision",
        extra={
            "method_arn": event.method_arn,
            "effect": response["policyDocument"]["Statement"][0]["Effect"],
        },
    )
    return response
