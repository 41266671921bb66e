from resume_doctor.documents.base import BaseExtractor
from resume_doctor.documents.factory import DocumentNormalizerFactory
from resume_doctor.documents.models import NormalizedDocument, RawDocument
from resume_doctor.documents.normalizer import DocumentNormalizer

__all__ = [
    "BaseExtractor",
    "DocumentNormalizer",
    "DocumentNormalizerFactory",
    "NormalizedDocument",
    "RawDocument",
]
