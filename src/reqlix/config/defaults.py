"""
reqlix.config.defaults - Default configuration values.
"""

DEFAULT_CONFIG = {
    "requirements": {
        # Preferred requirements directory relative to the project root.
        # Empty means unset; REQLIX_REQ_REL_PATH also sets it.
        "rel_path": "",
        "search_paths": ["docs/development/requirements", "docs/dev/req"],
        "create_path": "docs/development/requirements",
        "instructions_file": "AGENTS.md",
    },
    "limits": {
        "max_project_root_len": 1000,
        "max_operation_desc_len": 10000,
        "max_category_len": 100,
        "max_chapter_len": 100,
        "max_index_len": 100,
        "max_text_len": 10000,
        "max_title_len": 100,
        "max_batch_size": 100,
        "max_keyword_len": 200,
    },
}
