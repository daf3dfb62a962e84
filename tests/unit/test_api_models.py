"""Tests for artebiblica.api.models - Pydantic request models.

Tests cover:
- Default values for optional fields.
- Enum coercion of download options.
- Required field validation.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from artebiblica.api.models import ExportImageRequest, GenerateRequest, PrintRequest, ShareRequest
from artebiblica.core.exporter import ExportFormat, PaperSize


class TestGenerateRequest:
    """Test GenerateRequest Pydantic model."""

    def test_defaults(self):
        req = GenerateRequest()
        assert req.prompt == ""
        assert req.style == "coloring"

    def test_values(self):
        req = GenerateRequest(prompt="Arca", style="cute")
        assert (req.prompt, req.style) == ("Arca", "cute")


class TestExportImageRequest:
    """Test ExportImageRequest Pydantic model."""

    def test_defaults(self):
        req = ExportImageRequest(image="data:image/png;base64,AAAA")
        assert req.format is ExportFormat.PNG
        assert req.paper_size is PaperSize.ORIGINAL
        assert req.base_name == ""

    def test_enum_coercion(self):
        req = ExportImageRequest(image="x", format="jpeg", paper_size="a4")
        assert req.format is ExportFormat.JPEG
        assert req.paper_size is PaperSize.A4

    def test_missing_image_raises(self):
        with pytest.raises(ValidationError):
            ExportImageRequest()

    @pytest.mark.parametrize("field,value", [("format", "gif"), ("paper_size", "letter")])
    def test_invalid_options_raise(self, field, value):
        with pytest.raises(ValidationError):
            ExportImageRequest(image="x", **{field: value})


class TestPrintAndShareRequests:
    """Test PrintRequest and ShareRequest."""

    def test_print_requires_image(self):
        with pytest.raises(ValidationError):
            PrintRequest(image="")

    def test_share_requires_page_url(self):
        with pytest.raises(ValidationError):
            ShareRequest(prompt="Arca")

    def test_share_prompt_defaults_empty(self):
        assert ShareRequest(page_url="https://example.com").prompt == ""
