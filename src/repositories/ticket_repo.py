"""Ticket table access."""

from typing import List

from botocore.exceptions import ClientError

from models.ticket import TicketRecord
from repositories.applicant_repo import APPLICANT_KIND
from repositories.dynamodb_repo import (
    DynamoDbStore,
    error_code,
    from_attribute_map,
    to_attribute_map,
)
from utils.error_handling import StoreUnavailableError, UnresolvableApplicantError
from utils.logging_config import get_logger

logger = get_logger(__name__)

APPLICANT_TICKETS_INDEX = "applicant-index"


class TicketRepository:
    """Append-only ticket store."""

    def __init__(self, store: DynamoDbStore):
        self.store = store

    @property
    def table_name(self) -> str:
        return self.store.tickets_table_name

    def create(self, ticket: TicketRecord) -> None:
        """
        Write the ticket only if its applicant exists.

        The applicant check and the put run in one transaction, so an orphan
        ticket is never stored.
        """
        client = self.store.ensure_ready()
        item = ticket.model_dump(mode="python")
        item["payment_type"] = ticket.payment_type.value
        item["booked_at"] = ticket.booked_at.isoformat()
        try:
            with self.store.translate_errors("insert ticket"):
                client.transact_write_items(
                    TransactItems=[
                        {
                            "ConditionCheck": {
                                "TableName": self.store.applicants_table_name,
                                "Key": {"record_ref": {"S": ticket.applicant_ref}},
                                "ConditionExpression": "attribute_exists(record_ref) AND #k = :kind",
                                "ExpressionAttributeNames": {"#k": "kind"},
                                "ExpressionAttributeValues": {":kind": {"S": APPLICANT_KIND}},
                            }
                        },
                        {
                            "Put": {
                                "TableName": self.table_name,
                                "Item": to_attribute_map(item),
                                "ConditionExpression": "attribute_not_exists(ticket_id)",
                            }
                        },
                    ],
                    ClientRequestToken=ticket.ticket_id,
                )
        except ClientError as exc:
            if error_code(exc) != "TransactionCanceledException":
                raise
            reasons = [r.get("Code", "None") for r in exc.response.get("CancellationReasons", [])]
            if reasons and reasons[0] == "ConditionalCheckFailed":
                raise UnresolvableApplicantError() from exc
            logger.warning(
                "Ticket transaction cancelled",
                extra={"ticket_id": ticket.ticket_id, "reasons": reasons},
            )
            raise StoreUnavailableError(f"insert ticket cancelled: {reasons}") from exc

    def list_for_applicant(self, applicant_ref: str) -> List[TicketRecord]:
        """All tickets booked against an applicant, newest first."""
        client = self.store.ensure_ready()
        tickets: List[TicketRecord] = []
        kwargs = {
            "TableName": self.table_name,
            "IndexName": APPLICANT_TICKETS_INDEX,
            "KeyConditionExpression": "applicant_ref = :ref",
            "ExpressionAttributeValues": {":ref": {"S": applicant_ref}},
            "ScanIndexForward": False,
        }
        while True:
            with self.store.translate_errors("query tickets"):
                resp = client.query(**kwargs)
            tickets.extend(
                TicketRecord.model_validate(from_attribute_map(item))
                for item in resp.get("Items", [])
            )
            last_key = resp.get("LastEvaluatedKey")
            if not last_key:
                return tickets
            kwargs["ExclusiveStartKey"] = last_key
