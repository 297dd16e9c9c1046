"""Domain layer for caseflow.

Pure models and functions for cases, task trees and draft review.
Nothing in this package performs I/O.
"""
