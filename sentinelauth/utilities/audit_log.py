#!/usr/bin/env python3
# -*- coding: utf-8 -*-


from datetime import datetime, timezone
import json
import os
import sys
import typing
import threading
import sentinelauth.constants as CONSTANTS

_AUDIT_FILE = "audit.log"


#####################################################################################################################################################################

"""
    Provides persistent structured audit logging for SentinelAuth callers.
    Secret material (passwords, derived keys, salts) must never be passed as event values.
    Without an explicit path or SENTINELAUTH_AUDIT_LOG, events go to audit.log in the
    working directory at construction time.
"""
class AuditLog:

	def __init__(self, path: typing.Optional[str] = None):
		self._lock = threading.RLock()
		self.path = path if path else CONSTANTS.audit_log_path(os.path.join(os.getcwd(), _AUDIT_FILE))


	def event(self, **kv: typing.Any):

		# Construct ISO8601Z timestamp
		ts = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

		# Append timestamp to event
		record = {"timestamp": ts}
		record.update(kv)

		with self._lock:
			try:
				with open(self.path, "a", encoding="utf-8") as f:
					json.dump(record, f, ensure_ascii=False)
					f.write("\n")

			except Exception as e:
				print(f"Audit log write error: {e}", file=sys.stderr)
