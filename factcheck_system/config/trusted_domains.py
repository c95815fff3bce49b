"""Trusted source configuration for evidence gating and query construction.

Evidence whose host is not one of these domains (or a subdomain of one) is
discarded before stance classification. Edit the lists here, or set
EXTRA_TRUSTED_DOMAINS, to change the registry; nothing else needs to change.

Two groups:
1. Fact-checkers: targeted by debunking queries (fake/doubtful pages)
2. Reference outlets: targeted by coverage queries (trustworthy pages)
"""

from typing import Dict, List

# Fact-checking organisations
FACT_CHECK_DOMAINS: List[str] = [
    "g1.globo.com",  # includes /fato-ou-fake
    "aosfatos.org",
    "piaui.folha.uol.com.br",  # Agência Lupa
    "boatos.org",
    "e-farsas.com",
    "snopes.com",
    "factcheck.org",
    "poligrafo.sapo.pt",
]

# Reference news outlets
NEWS_OUTLET_DOMAINS: List[str] = [
    "bbc.com",
    "reuters.com",
    "apnews.com",
    "nytimes.com",
    "elpais.com",
    "agenciabrasil.ebc.com.br",
    "estadao.com.br",
    "folha.uol.com.br",
    "uol.com.br",
    "nexojornal.com.br",
    "cnnbrasil.com.br",
    "veja.abril.com.br",
    "band.uol.com.br",
]

TRUSTED_DOMAINS: List[str] = FACT_CHECK_DOMAINS + NEWS_OUTLET_DOMAINS

# site: filters used by the label-aware query generator.
# Sites whose fact-check section lives under a path are narrowed to it.
SITE_FILTER_PATHS: Dict[str, str] = {
    "g1.globo.com": "g1.globo.com/fato-ou-fake",
}

FACT_CHECK_SITE_FILTERS: List[str] = [
    f"site:{SITE_FILTER_PATHS.get(domain, domain)}" for domain in FACT_CHECK_DOMAINS
]

NEWS_OUTLET_SITE_FILTERS: List[str] = [f"site:{domain}" for domain in NEWS_OUTLET_DOMAINS]
