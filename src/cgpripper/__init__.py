"""
CGP Ripper: Digital Textbook to PDF Converter

A utility for fetching the page backgrounds and vector overlays of a purchased
CGP digital textbook, composing each page as HTML, and rendering the whole
book into a single merged PDF for offline reading.
"""

__version__ = "1.0.0"
__author__ = "CGP Ripper Project"
__description__ = "Rip a CGP digital book to PDF"
