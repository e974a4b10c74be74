from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ResponseEnvelope(BaseModel, Generic[T]):
    """
    Generic wrapper returned by the customer handler and the operations API.

    ``data`` may be None on the wire; the operations client normalizes it to
    an empty list before handing the envelope to its callers.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "status": "200",
                "comment": "OK",
                "sessionId": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
                "data": []
            }
        }
    )

    status: Optional[str] = Field(None, description="Status code reported by the producer")
    comment: Optional[str] = Field(None, description="Free-text comment")
    session_id: Optional[str] = Field(None, description="Session or correlation identifier")
    data: Optional[List[T]] = Field(None, description="Payload items")
