from lifesync.storage.local_store import LocalStore, default_profile, seed_logs

__all__ = ["LocalStore", "default_profile", "seed_logs"]
