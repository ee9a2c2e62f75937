# Overview: Human-readable document numbers drawn from monotonic sequences.

from __future__ import annotations

from ..repositories import Repository


JOB_CARD_SEQUENCE = ("JOB_CARD", "JC", 4)
INVOICE_SEQUENCE = ("INVOICE", "INV", 6)


def next_document_number(repo: Repository, *, document_type: str, prefix: str, pad: int = 4) -> str:
    """
    Allocate the next document number, e.g. "JC-0007" or "INV-000042".

    Numbers come from the repository's sequence, so two documents of one type
    never share a number even when created in the same instant. Padding is a
    minimum width; numbers past it just grow longer.
    """
    number = repo.next_sequence(document_type)
    return f"{prefix}-{number:0{pad}d}"


def next_job_number(repo: Repository) -> str:
    document_type, prefix, pad = JOB_CARD_SEQUENCE
    return next_document_number(repo, document_type=document_type, prefix=prefix, pad=pad)


def next_invoice_number(repo: Repository) -> str:
    document_type, prefix, pad = INVOICE_SEQUENCE
    return next_document_number(repo, document_type=document_type, prefix=prefix, pad=pad)
