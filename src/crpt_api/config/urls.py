from __future__ import annotations


DOCUMENT_CREATE_URL = "https://ismp.crpt.ru/api/v3/lk/documents/create"
