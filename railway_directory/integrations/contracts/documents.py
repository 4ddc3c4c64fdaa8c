from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """A document published by the external document source.

    Every field is a plain string; missing values are normalised to "" before
    the model is built (see response_wrappers.normalize_document).
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    title: str = ""
    link: str = ""
    uploaded_by: str = Field(default="", alias="uploadedBy")
    created_at: str = Field(default="", alias="createdAt")
    updated_at: str = Field(default="", alias="updatedAt")
