"""Front-end stages of a compiler for the Must language: diagnostics, syntax trees and module trees."""

__version__ = "0.1.0"