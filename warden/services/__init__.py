"""
Invite Warden - Services Package
================================

- invite_tracker.py: Invite attribution, anti-alt gate, reward role
- antispam.py: Per-user sliding-window flood detection
- content_filter.py: Mass-mention and blocked-link checks
- broadcast.py: Paced bulk DM delivery
- heartbeat.py: Periodic liveness message
"""
