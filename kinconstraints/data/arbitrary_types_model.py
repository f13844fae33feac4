from pydantic import BaseModel, ConfigDict


class ArbitraryTypesModel(BaseModel):
    """Model with arbitrary types allowed (numpy vectors and quaternions)."""
    model_config = ConfigDict(arbitrary_types_allowed=True)
