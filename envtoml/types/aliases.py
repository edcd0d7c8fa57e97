from typing import Optional

# -------- Aliases (clarify intent) --------
EnvName = str  # raw environment variable name, e.g. "APP_DB__HOST"
SectionName = str  # dotted section path, e.g. "db" or "a.b"
ItemPath = tuple[Optional[SectionName], str]  # (section, key)
