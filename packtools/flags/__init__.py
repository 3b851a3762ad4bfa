"""Typed command-line flag values and grouped flag sets."""