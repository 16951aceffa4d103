from .utils import load_xml_file_to_soup, set_logging_level, write_json_file

__all__ = [
    "load_xml_file_to_soup",
    "set_logging_level",
    "write_json_file",
]
