"""
Data layer construct: applicants and tickets DynamoDB tables plus the
attachments bucket.
"""

from aws_cdk import (
    RemovalPolicy,
    aws_dynamodb as dynamodb,
    aws_s3 as s3,
)
from constructs import Construct

# Secondary indexes the applicant repository queries by name.
PHONE_INDEXES = (
    ("phone-index", "phone"),
    ("whatsapp-index", "whatsapp"),
    ("number-index", "number"),
)
APPLICANT_TICKETS_INDEX = "applicant-index"


class DataLayerConstruct(Construct):
    """Provision storage resources."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        environment: str,
    ) -> None:
        super().__init__(scope, construct_id)

        is_prod = environment == "prod"
        removal = RemovalPolicy.RETAIN if is_prod else RemovalPolicy.DESTROY

        # Applicants plus PASSID#<id> claim items, keyed by record_ref.
        self.applicants_table = dynamodb.Table(
            self,
            "Applicants",
            partition_key=dynamodb.Attribute(
                name="record_ref", type=dynamodb.AttributeType.STRING
            ),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            point_in_time_recovery=is_prod,
            removal_policy=removal,
        )
        for index_name, attribute in PHONE_INDEXES:
            self.applicants_table.add_global_secondary_index(
                index_name=index_name,
                partition_key=dynamodb.Attribute(
                    name=attribute, type=dynamodb.AttributeType.STRING
                ),
                projection_type=dynamodb.ProjectionType.KEYS_ONLY,
            )

        self.tickets_table = dynamodb.Table(
            self,
            "Tickets",
            partition_key=dynamodb.Attribute(
                name="ticket_id", type=dynamodb.AttributeType.STRING
            ),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            point_in_time_recovery=is_prod,
            removal_policy=removal,
        )
        self.tickets_table.add_global_secondary_index(
            index_name=APPLICANT_TICKETS_INDEX,
            partition_key=dynamodb.Attribute(
                name="applicant_ref", type=dynamodb.AttributeType.STRING
            ),
            sort_key=dynamodb.Attribute(name="booked_at", type=dynamodb.AttributeType.STRING),
            projection_type=dynamodb.ProjectionType.ALL,
        )

        # Applicant photos and identity documents.
        self.attachments_bucket = s3.Bucket(
            self,
            "Attachments",
            block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
            encryption=s3.BucketEncryption.S3_MANAGED,
            enforce_ssl=True,
            removal_policy=removal,
            auto_delete_objects=not is_prod,
        )
