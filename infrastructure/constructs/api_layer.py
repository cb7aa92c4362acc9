"""
API layer construct: shared Lambda + HTTP API routes.

A single Lambda keeps the store connection and lookup cache warm.
Uses Docker bundling for dependencies (runs in CI/CD pipeline).
"""

from typing import Dict

from aws_cdk import (
    BundlingOptions,
    Duration,
    aws_lambda as _lambda,
    aws_apigatewayv2 as apigw,
    aws_apigatewayv2_integrations as integrations,
    aws_logs as logs,
)
from constructs import Construct


class ApiLayerConstruct(Construct):
    """Expose the counter endpoints via HTTP API."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        environment: str,
        runtime_env: Dict[str, str],
        lambda_memory_mb: int = 512,
        lambda_timeout_seconds: int = 30,
    ) -> None:
        super().__init__(scope, construct_id)

        # Installs qrcode, pillow, pydantic and python-json-logger next to the code.
        bundled_code = _lambda.Code.from_asset(
            "src",
            bundling=BundlingOptions(
                image=_lambda.Runtime.PYTHON_3_12.bundling_image,
                command=[
                    "bash", "-c",
                    "pip install -r requirements-lambda.txt -t /asset-output && "
                    "cp -r . /asset-output"
                ],
            ),
        )

        self.main_lambda = _lambda.Function(
            self,
            "ApiHandler",
            runtime=_lambda.Runtime.PYTHON_3_12,
            handler="handlers.main.lambda_handler",
            code=bundled_code,
            memory_size=lambda_memory_mb,
            timeout=Duration.seconds(lambda_timeout_seconds),
            architecture=_lambda.Architecture.X86_64,
            environment={"ENVIRONMENT": environment, **runtime_env},
            log_retention=logs.RetentionDays.ONE_WEEK,
        )

        self.api = apigw.HttpApi(
            self,
            "HttpApi",
            api_name=f"bus-pass-api-{environment}",
            cors_preflight=apigw.CorsPreflightOptions(
                allow_origins=["*"],
                allow_methods=[apigw.CorsHttpMethod.ANY],
                allow_headers=["Content-Type"],
            ),
        )

        integration = integrations.HttpLambdaIntegration(
            "LambdaIntegration", self.main_lambda
        )

        # Same paths the counter front end already calls.
        route_defs = [
            (apigw.HttpMethod.GET, "/health"),
            (apigw.HttpMethod.POST, "/apply"),
            (apigw.HttpMethod.GET, "/verify/{phone}"),
            (apigw.HttpMethod.GET, "/applicant/{id}"),
            (apigw.HttpMethod.GET, "/getApplicant/{passId}"),
            (apigw.HttpMethod.POST, "/bookTicket"),
            (apigw.HttpMethod.GET, "/tickets/applicant/{id}"),
        ]

        for method, path in route_defs:
            self.api.add_routes(
                path=path,
                methods=[method],
                integration=integration,
            )
