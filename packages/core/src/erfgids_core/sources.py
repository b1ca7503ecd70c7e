"""Legal and fiscal references shown next to nudges and in exported dossiers.

Each reference records when it was last checked against the published text.
"""

from typing import Optional

from pydantic import BaseModel


class LegalSource(BaseModel):
    """A public reference the engine relies on."""
    id: str
    name: str
    verified: str
    url: str


SOURCES: tuple[LegalSource, ...] = (
    LegalSource(
        id="sp_succession_2025",
        name="Service-Public — Droits de succession",
        verified="Vérifié le 31 juillet 2025",
        url="https://www.service-public.fr/particuliers/vosdroits/F35794",
    ),
    LegalSource(
        id="sp_donation_2024",
        name="Service-Public — Droits de donation",
        verified="Vérifié le 07 novembre 2024",
        url="https://www.service-public.fr/particuliers/vosdroits/F14203",
    ),
    LegalSource(
        id="sp_pacs_2026",
        name="Service-Public — Effets d'un PACS",
        verified="Vérifié le 27 janvier 2026",
        url="https://www.service-public.fr/particuliers/vosdroits/F1026",
    ),
    LegalSource(
        id="legi_cc_912",
        name="Légifrance — Code civil, art. 912 (réserve/quotité)",
        verified="Version en vigueur depuis le 01 janvier 2007",
        url="https://www.legifrance.gouv.fr/codes/article_lc/LEGIARTI000006435530",
    ),
    LegalSource(
        id="eurlex_650_2012",
        name="EUR-Lex — Règlement (UE) n°650/2012 (successions)",
        verified="04 July 2012",
        url="https://eur-lex.europa.eu/eli/reg/2012/650/oj/eng",
    ),
)

_SOURCES_BY_ID = {source.id: source for source in SOURCES}


def get_source(source_id: str) -> Optional[LegalSource]:
    """Return the reference with this id, or None."""
    return _SOURCES_BY_ID.get(source_id)


def list_sources(source_ids: Optional[set[str]] = None) -> list[LegalSource]:
    """Return references in declaration order, optionally restricted to ids."""
    if source_ids is None:
        return list(SOURCES)
    return [source for source in SOURCES if source.id in source_ids]
