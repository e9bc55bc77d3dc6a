"""Option dataclasses for office2site conversions."""

from office2site.options.base import CloneFrozenMixin
from office2site.options.docx import DocxOptions
from office2site.options.pptx import PptxOptions
from office2site.options.site import SiteOptions

__all__ = ["CloneFrozenMixin", "DocxOptions", "PptxOptions", "SiteOptions"]
