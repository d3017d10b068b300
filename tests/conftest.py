"""Shared fixtures: in-memory documents and a fake inference endpoint."""

import json
from io import BytesIO
from typing import Callable, List

import httpx
import pytest
from docx import Document

VALID_COMPLETION = json.dumps(
    {
        "matches": ["Python", "REST APIs"],
        "gaps": ["Kubernetes"],
        "improvedProfile": "Backend engineer with Python and REST API experience.",
        "suggestions": ["Add a Kubernetes side project", "Quantify API latency wins"],
    }
)


def build_pdf(pages: List[str]) -> bytes:
    """Assemble a minimal PDF with one line of Helvetica text per page."""
    n_pages = len(pages)
    font_id = 3
    page_ids = [4 + 2 * i for i in range(n_pages)]
    objects = {
        1: b"<< /Type /Catalog /Pages 2 0 R >>",
        2: (
            "<< /Type /Pages /Kids [%s] /Count %d >>"
            % (" ".join(f"{pid} 0 R" for pid in page_ids), n_pages)
        ).encode("latin-1"),
        font_id: b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    }
    for pid, text in zip(page_ids, pages):
        content = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
        objects[pid] = (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 {font_id} 0 R >> >> /Contents {pid + 1} 0 R >>"
        ).encode("latin-1")
        objects[pid + 1] = (
            b"<< /Length %d >>\nstream\n" % len(content) + content + b"\nendstream"
        )

    out = BytesIO()
    out.write(b"%PDF-1.4\n")
    offsets = {}
    for obj_id in sorted(objects):
        offsets[obj_id] = out.tell()
        out.write(b"%d 0 obj\n" % obj_id + objects[obj_id] + b"\nendobj\n")
    xref_at = out.tell()
    size = max(objects) + 1
    out.write(b"xref\n0 %d\n" % size)
    out.write(b"0000000000 65535 f \n")
    for obj_id in range(1, size):
        out.write(b"%010d 00000 n \n" % offsets[obj_id])
    out.write(b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (size, xref_at))
    return out.getvalue()


def build_docx(paragraphs: List[str], table: List[List[str]] = None, header: str = "") -> bytes:
    doc = Document()
    if header:
        doc.sections[0].header.paragraphs[0].text = header
    for p in paragraphs:
        doc.add_paragraph(p)
    if table:
        t = doc.add_table(rows=len(table), cols=len(table[0]))
        for r, row in enumerate(table):
            for c, value in enumerate(row):
                t.cell(r, c).text = value
    buf = BytesIO()
    doc.save(buf)
    return buf.getvalue()


class FakeOllama:
    """Records requests and answers with a canned response."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []
        self._responder = responder

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def bodies(self) -> List[dict]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def fake_ollama():
    """Factory: fake_ollama(completion=..., status=..., body=...)."""

    def make(completion: str = VALID_COMPLETION, status: int = 200, body=None) -> FakeOllama:
        payload = body if body is not None else {"model": "llama3.2", "response": completion, "done": True}

        def respond(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, json=payload)

        return FakeOllama(respond)

    return make
