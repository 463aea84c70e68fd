"""Backend response envelope and paginated list models."""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ApiEnvelope(BaseModel):
    """Uniform wrapper every backend response uses."""

    model_config = ConfigDict(extra="ignore")

    success: bool = True
    message: str | None = None
    data: Any = None


class Page(BaseModel):
    """One page of a list result.

    Backends answer list calls either with a Spring-style page object or with
    a bare JSON array; both are normalized to this shape.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    content: list[Any] = Field(default_factory=list)
    total_pages: int = Field(default=0, alias="totalPages")
    total_elements: int = Field(default=0, alias="totalElements")
    page: int = 0
    size: int = 20

    @classmethod
    def from_payload(cls, payload: Any, page: int = 0, size: int = 20) -> "Page":
        """Normalize a list payload into a Page.

        Args:
            payload: Unwrapped `data` of a list response
            page: Zero-based page that was requested
            size: Page size that was requested

        Returns:
            Page holding the requested slice and totals
        """
        if payload is None:
            return cls(page=page, size=size)

        if isinstance(payload, list):
            # Full result set, page it locally
            total = len(payload)
            start = page * size
            return cls(
                content=payload[start : start + size],
                total_pages=math.ceil(total / size) if size > 0 else 0,
                total_elements=total,
                page=page,
                size=size,
            )

        if isinstance(payload, dict):
            data = dict(payload)
            if "page" not in data and "number" in data:
                data["page"] = data["number"]
            data.setdefault("page", page)
            data.setdefault("size", size)
            result = cls.model_validate(data)
            if "totalElements" not in payload:
                result.total_elements = len(result.content)
            if "totalPages" not in payload and result.size > 0:
                result.total_pages = math.ceil(result.total_elements / result.size)
            return result

        raise TypeError(f"Unsupported list payload: {type(payload).__name__}")

    @property
    def is_empty(self) -> bool:
        return not self.content
