import os

# Input / output locations
LAWS_XML_ROOT = os.environ.get("LAWS_XML_ROOT", "data/raw/laws-lois-xml")
LIMS_XSLT_PATH = os.environ.get("LIMS_XSLT_PATH", "data/raw/LIMS2HTML.xsl")
OUTPUT_PATH = os.environ.get("OUTPUT_PATH", "data/processed/legislation.json")
GRAPH_OUTPUT_PATH = os.environ.get("GRAPH_OUTPUT_PATH", None)

# Worker pool size for per-file extraction (1 = sequential)
PARALLEL_WORKERS = int(os.environ.get("PARALLEL_WORKERS", "1"))

# Corpus directory layout within LAWS_XML_ROOT, as (language, kind) -> relative path
CORPUS_DIRECTORIES = {
    ("eng", "acts"): "eng/acts",
    ("eng", "regulations"): "eng/regulations",
    ("fra", "acts"): "fra/lois",
    ("fra", "regulations"): "fra/reglements",
}

XML_FILE_PATTERN = "*.xml"

# Root tag of a LIMS document -> document type
ROOT_TAG_TYPE_MAPPING = {
    "Statute": "act",
    "Regulation": "regulation",
}

# Identification elements copied onto the document record
IDENTIFICATION_FIELDS = {
    "ShortTitle": "short_title",
    "LongTitle": "long_title",
    "BillNumber": "bill_number",
    "InstrumentNumber": "instrument_number",
    "ConsolidatedNumber": "consolidated_number",
}

# Namespaced root attributes copied onto the document record
DATE_ATTRIBUTES = {
    "lims:lastAmendedDate": "last_amended_date",
    "lims:current-date": "current_date",
    "lims:inforce-start-date": "in_force_start_date",
}

# Elements whose text is left out of joined section text
TEXT_EXCLUDED_TAGS = {"MarginalNote"}
