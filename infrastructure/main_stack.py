"""
Main CDK Stack for the bus pass counter service.
"""

from aws_cdk import (
    Stack,
    Tags,
    CfnOutput,
)
from constructs import Construct

from infrastructure.constructs.data_layer import DataLayerConstruct
from infrastructure.constructs.api_layer import ApiLayerConstruct
from infrastructure.config.settings import Settings


class BusPassStack(Stack):
    """Main stack wiring storage and API together."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        settings: Settings,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # Global tags for cost/accounting.
        Tags.of(self).add("Project", "bus-pass-counter")
        Tags.of(self).add("Environment", settings.environment)
        Tags.of(self).add("ManagedBy", "cdk")

        # 1) Data layer.
        data_construct = DataLayerConstruct(
            self,
            "DataLayer",
            environment=settings.environment,
        )

        # 2) API layer (single Lambda).
        api_construct = ApiLayerConstruct(
            self,
            "ApiLayer",
            environment=settings.environment,
            runtime_env={
                "APPLICANTS_TABLE": data_construct.applicants_table.table_name,
                "TICKETS_TABLE": data_construct.tickets_table.table_name,
                "ATTACHMENTS_BUCKET": data_construct.attachments_bucket.bucket_name,
                "PASS_ID_PREFIX": settings.pass_id_prefix,
                "PASS_ID_MAX_ATTEMPTS": str(settings.pass_id_max_attempts),
                "STRICT_PAYMENT_TYPES": str(settings.strict_payment_types).lower(),
                "STORE_TIMEOUT_SECONDS": str(settings.store_timeout_seconds),
                "LOOKUP_CACHE_TTL_SECONDS": str(settings.lookup_cache_ttl_seconds),
            },
            lambda_memory_mb=settings.lambda_memory_mb,
            lambda_timeout_seconds=settings.lambda_timeout_seconds,
        )

        # Permissions for the API Lambda.
        data_construct.applicants_table.grant_read_write_data(api_construct.main_lambda)
        data_construct.tickets_table.grant_read_write_data(api_construct.main_lambda)
        data_construct.attachments_bucket.grant_put(api_construct.main_lambda)

        # Outputs to quickly find resources.
        CfnOutput(self, "ApiEndpoint", value=api_construct.api.api_endpoint)
        CfnOutput(self, "ApplicantsTable", value=data_construct.applicants_table.table_name)
        CfnOutput(self, "TicketsTable", value=data_construct.tickets_table.table_name)
        CfnOutput(self, "AttachmentsBucket", value=data_construct.attachments_bucket.bucket_name)
