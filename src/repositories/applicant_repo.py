"""
Applicant table access.

Applicants and pass-id claims share one table keyed by ``record_ref``. A
claim item ``PASSID#<pass id>`` is written in the same transaction as the
applicant, so a pass id can only ever be bound to one record.
"""

from typing import Any, Dict, Optional

from botocore.exceptions import ClientError

from models.applicant import ApplicantRecord
from repositories.dynamodb_repo import (
    DynamoDbStore,
    error_code,
    from_attribute_map,
    to_attribute_map,
)
from utils.error_handling import DuplicateIdentifierError, StoreUnavailableError
from utils.logging_config import get_logger

logger = get_logger(__name__)

APPLICANT_KIND = "applicant"
CLAIM_KIND = "pass_id_claim"
CLAIM_PREFIX = "PASSID#"

# Phone lookups try each field in this order; first hit wins.
PHONE_INDEXES = (
    ("phone", "phone-index"),
    ("whatsapp", "whatsapp-index"),
    ("number", "number-index"),
)


class PassIdTakenError(Exception):
    """The pass id is already claimed by another applicant."""

    def __init__(self, pass_id: str):
        super().__init__(f"Pass id {pass_id} already issued")
        self.pass_id = pass_id


def claim_key(pass_id: str) -> str:
    return f"{CLAIM_PREFIX}{pass_id}"


class ApplicantRepository:
    """Read and write applicant records."""

    def __init__(self, store: DynamoDbStore):
        self.store = store

    @property
    def table_name(self) -> str:
        return self.store.applicants_table_name

    def insert(self, record: ApplicantRecord) -> None:
        """Write the applicant and its pass-id claim atomically.

        ``record_ref`` doubles as the idempotency token, so resending the same
        record after a timeout cannot create a duplicate.
        """
        client = self.store.ensure_ready()
        item = record.model_dump(mode="json")
        item["kind"] = APPLICANT_KIND
        claim = {
            "record_ref": claim_key(record.pass_id),
            "kind": CLAIM_KIND,
            "claimed_by": record.record_ref,
            "created_at": item["created_at"],
        }
        try:
            with self.store.translate_errors("insert applicant"):
                client.transact_write_items(
                    TransactItems=[
                        {
                            "Put": {
                                "TableName": self.table_name,
                                "Item": to_attribute_map(item),
                                "ConditionExpression": "attribute_not_exists(record_ref)",
                            }
                        },
                        {
                            "Put": {
                                "TableName": self.table_name,
                                "Item": to_attribute_map(claim),
                                "ConditionExpression": "attribute_not_exists(record_ref)",
                            }
                        },
                    ],
                    ClientRequestToken=record.record_ref,
                )
        except ClientError as exc:
            if error_code(exc) != "TransactionCanceledException":
                raise
            self._raise_for_cancellation(exc, record)

    def _raise_for_cancellation(self, exc: ClientError, record: ApplicantRecord) -> None:
        reasons = [r.get("Code", "None") for r in exc.response.get("CancellationReasons", [])]
        applicant_reason, claim_reason = (reasons + ["None", "None"])[:2]
        if claim_reason == "ConditionalCheckFailed":
            raise PassIdTakenError(record.pass_id) from exc
        if applicant_reason == "ConditionalCheckFailed":
            raise DuplicateIdentifierError("Record reference already in use") from exc
        logger.warning(
            "Applicant transaction cancelled",
            extra={"record_ref": record.record_ref, "reasons": reasons},
        )
        raise StoreUnavailableError(f"insert applicant cancelled: {reasons}") from exc

    def _get_item(self, key: str) -> Optional[Dict[str, Any]]:
        client = self.store.ensure_ready()
        with self.store.translate_errors("get applicant"):
            resp = client.get_item(
                TableName=self.table_name,
                Key={"record_ref": {"S": key}},
                ConsistentRead=True,
            )
        item = resp.get("Item")
        return from_attribute_map(item) if item else None

    def get(self, record_ref: str) -> Optional[ApplicantRecord]:
        item = self._get_item(record_ref)
        if not item or item.get("kind") != APPLICANT_KIND:
            return None
        return ApplicantRecord.model_validate(item)

    def find_by_pass_id(self, pass_id: str) -> Optional[ApplicantRecord]:
        """Follow the claim item to the applicant; both reads are consistent."""
        claim = self._get_item(claim_key(pass_id))
        if not claim or claim.get("kind") != CLAIM_KIND:
            return None
        return self.get(claim["claimed_by"])

    def find_ref_by_phone(self, phone: str) -> Optional[str]:
        """
        Return the record_ref of the first applicant carrying ``phone``.

        GSI queries are eventually consistent, so an applicant issued a moment
        ago may not be found yet; pass-id and record-ref reads are consistent.
        """
        client = self.store.ensure_ready()
        for field, index in PHONE_INDEXES:
            with self.store.translate_errors("query applicant by phone"):
                resp = client.query(
                    TableName=self.table_name,
                    IndexName=index,
                    KeyConditionExpression="#f = :phone",
                    ExpressionAttributeNames={"#f": field},
                    ExpressionAttributeValues={":phone": {"S": phone}},
                    Limit=1,
                )
            items = resp.get("Items", [])
            if items:
                return from_attribute_map(items[0])["record_ref"]
        return None
