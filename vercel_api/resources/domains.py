"""Domains and DNS records."""

from __future__ import annotations

from vercel_api.resources.base import Resource, items_of
from vercel_api.schemas import (
    AddDomainRequest,
    CreateDNSRecordRequest,
    DNSRecord,
    DNSRecordPage,
    Domain,
    DomainPage,
    DomainVerification,
)


class DomainsAPI(Resource):
    model = Domain
    page_model = DomainPage
    paths = {
        "list": "/v5/domains",
        "get": "/v5/domains/{name}",
        "create": "/v5/domains",
        "delete": "/v6/domains/{name}",
        "verify": "/v5/domains/{name}/verify",
        "records": "/v4/domains/{domain}/records",
        "record_create": "/v2/domains/{domain}/records",
        "record_delete": "/v2/domains/{domain}/records/{record_id}",
    }

    def list(self, limit: int | None = None, until: int | None = None):
        return self._list(limit=limit, until=until)

    def list_all(self, limit: int | None = None):
        return self._list_all(limit=limit)

    def get(self, name: str):
        return self._retrieve(name=name)

    def add(self, request: AddDomainRequest):
        return self._create(request)

    def remove(self, name: str):
        return self._destroy(name=name)

    def verify(self, name: str):
        return self._http.execute(
            "POST",
            self._op_path("verify", name=name),
            body={},
            response_model=DomainVerification,
        )

    def dns_records(self, domain: str):
        return self._http.execute(
            "GET",
            self._op_path("records", domain=domain),
            response_model=DNSRecordPage,
            unwrap=items_of,
        )

    def create_dns_record(self, domain: str, request: CreateDNSRecordRequest):
        return self._http.execute(
            "POST",
            self._op_path("record_create", domain=domain),
            body=request,
            response_model=DNSRecord,
        )

    def delete_dns_record(self, domain: str, record_id: str):
        return self._http.execute_empty(
            "DELETE",
            self._op_path("record_delete", domain=domain, record_id=record_id),
        )
