import os
from dotenv import load_dotenv

load_dotenv()

# logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# rule tables: optional JSON file replacing the bundled mapping_rules.json
MAPPING_RULES_PATH = os.getenv("MAPPING_RULES_PATH")

# number of worker threads used to analyze entity/view-model pairs
ANALYSIS_MAX_WORKERS = int(os.getenv("ANALYSIS_MAX_WORKERS", "1"))
