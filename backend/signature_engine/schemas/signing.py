from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import List

from signature_engine.services.signing_service import PlacementRequest
from signature_engine.utils.geometry import NormalizedRect


class SignatureCoordinates(BaseModel):
    """Placement box as fractions of the page, origin at the top-left corner.

    Each component is in [0, 1]; the box itself may still run past the page
    edge (x + width > 1), which is accepted as-is.
    """
    page: int = Field(1, ge=1)
    x_pct: float = Field(alias="xPct", ge=0, le=1)
    y_pct: float = Field(alias="yPct", ge=0, le=1)
    width_pct: float = Field(alias="widthPct", ge=0, le=1)
    height_pct: float = Field(alias="heightPct", ge=0, le=1)

    model_config = ConfigDict(populate_by_name=True)

    def to_rect(self) -> NormalizedRect:
        return NormalizedRect(
            x=self.x_pct,
            y=self.y_pct,
            width=self.width_pct,
            height=self.height_pct,
        )


class SignPdfRequest(BaseModel):
    document_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("documentId", "pdfId", "document_id"),
    )
    signature_base64: str = Field(
        min_length=1,
        validation_alias=AliasChoices("signatureBase64", "signature_base64"),
    )  # data:<mime>;base64,<payload>
    coordinates: SignatureCoordinates

    def to_placement(self) -> PlacementRequest:
        return PlacementRequest(
            document_id=self.document_id,
            signature_data_url=self.signature_base64,
            page=self.coordinates.page,
            rect=self.coordinates.to_rect(),
        )


class SignPdfResponse(BaseModel):
    url: str
    original_hash: str = Field(alias="originalHash")
    signed_hash: str = Field(alias="signedHash")

    model_config = ConfigDict(populate_by_name=True)


class DocumentListResponse(BaseModel):
    documents: List[str]
