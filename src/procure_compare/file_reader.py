#!/usr/bin/env python3
"""
Text extraction for uploaded indent and quote files.
PDF pages go through pdfplumber, spreadsheets through openpyxl; plain text
is read as-is. The output is one line per row or printed line, ready for
the segmenter or the quote parser.
"""

import logging
import re
from pathlib import Path
from typing import List, Union

import pdfplumber
from openpyxl import load_workbook

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {'.txt', '.csv'}
PDF_SUFFIXES = {'.pdf'}
SPREADSHEET_SUFFIXES = {'.xlsx', '.xlsm'}


class UnsupportedFileError(ValueError):
    """Raised for file types the reader cannot turn into text."""


def detect_file_type(path: Union[str, Path]) -> str:
    suffix = Path(path).suffix.lower()
    if suffix in SPREADSHEET_SUFFIXES:
        return 'excel'
    if suffix in PDF_SUFFIXES:
        return 'pdf'
    if suffix in TEXT_SUFFIXES:
        return 'text'
    return 'unknown'


def extract_pdf_text(pdf_path: Union[str, Path]) -> str:
    """
    Extract text from every page of a PDF.

    Args:
        pdf_path: Path to the PDF file

    Returns:
        Page texts joined by newlines, CID artifacts removed
    """
    pages: List[str] = []
    with pdfplumber.open(str(pdf_path)) as pdf:
        for page in pdf.pages:
            page_text = page.extract_text()
            if page_text:
                pages.append(page_text)

    text = re.sub(r'\(cid:\d+\)', '', '\n'.join(pages))
    if not text.strip():
        logger.warning(f"No text extracted from PDF: {pdf_path}")
    return text


def extract_spreadsheet_text(xlsx_path: Union[str, Path]) -> str:
    """Flatten every sheet to one ' | '-joined line per non-empty row."""
    workbook = load_workbook(filename=str(xlsx_path), read_only=True, data_only=True)
    lines: List[str] = []
    try:
        for sheet in workbook.worksheets:
            for row in sheet.iter_rows(values_only=True):
                cells = [str(cell) for cell in row if cell is not None and str(cell).strip()]
                if cells:
                    lines.append(' | '.join(cells))
    finally:
        workbook.close()
    return '\n'.join(lines)


def read_text(path: Union[str, Path]) -> str:
    """Read an indent or quote file as text, dispatching on its extension."""
    file_type = detect_file_type(path)
    if file_type == 'excel':
        text = extract_spreadsheet_text(path)
    elif file_type == 'pdf':
        text = extract_pdf_text(path)
    elif file_type == 'text':
        text = Path(path).read_text(encoding='utf-8')
    else:
        raise UnsupportedFileError(f"Unsupported file type: {path}")

    logger.info(f"Read {len(text)} characters from {path}")
    return text
