# This file marks the schemas package for request payloads, rows and response envelopes.
