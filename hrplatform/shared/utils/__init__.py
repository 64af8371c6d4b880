from hrplatform.shared.utils.generators import generate_cuid, utc_now

__all__ = ["generate_cuid", "utc_now"]
