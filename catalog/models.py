# catalog/models.py
from pydantic import BaseModel, ConfigDict
from typing import Any, List, Optional, Union

Scalar = Union[int, float, str, bool, None]

class Product(BaseModel):
    # records are free-form on the server; unknown keys are kept
    model_config = ConfigDict(extra="allow")

    id: Union[str, int]
    category: Optional[Any] = None
    category_name: Optional[str] = None
    name: Optional[str] = None
    short_description: Optional[str] = None
    price_from: Scalar = None
    material: Scalar = None
    finish: Scalar = None
    technology: Scalar = None
    size_mm: Scalar = None
    packaging: Scalar = None
    badges: Optional[Any] = None
    extra_text: Scalar = None
    images: List[str] = []
