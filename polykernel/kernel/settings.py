from configparser import ConfigParser, Error
from pathlib import Path
from typing import Optional, Union


class Settings:
    """
    Sections of string values backed by an optional ini file. Geometry contexts are stored in
    the `context` section:

        [context]
        precision = 5
        epsilon = 1.0

    Values are kept as strings and converted on read, so a malformed entry falls back to the
    default of the reader.
    """

    def __init__(self, filename: Optional[Union[str, Path]] = None, ignore_settings=False):
        self._config_file = None if filename is None else Path(filename)
        self._sections = {}
        if not ignore_settings:
            self.read_configuration()

    def __contains__(self, section):
        return section in self._sections

    def read_configuration(self):
        """
        Merge the values of the ini file into the sections. A missing or unreadable file leaves
        the sections as they are.
        """
        if self._config_file is None:
            return
        parser = ConfigParser(interpolation=None)
        try:
            parser.read(self._config_file, encoding="utf-8")
        except (OSError, Error):
            return
        for section in parser.sections():
            self._sections.setdefault(section, {}).update(parser.items(section))

    def write_configuration(self):
        if self._config_file is None:
            return
        parser = ConfigParser(interpolation=None)
        parser.read_dict(self._sections)
        try:
            with open(self._config_file, "w", encoding="utf-8") as fp:
                parser.write(fp)
        except OSError:
            return

    def read_persistent(self, t: type, section: str, key: str, default=None):
        """
        Value of key in section converted with t.

        @param t: conversion type, int, float or str
        @param section: section name
        @param key: key in the section
        @param default: returned if the key is missing or does not convert
        @return: value
        """
        try:
            return t(self._sections[section][key])
        except (KeyError, ValueError):
            return default

    def write_persistent(self, section: str, key: str, value: Union[str, int, float]):
        self._sections.setdefault(section, {})[key] = str(value)
