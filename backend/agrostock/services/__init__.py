# Overview: Service layer; every ledger operation lives in one of these modules.
