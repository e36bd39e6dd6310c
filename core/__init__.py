"""Core signal synthesis logic: indicators, classification, fusion, models.

This package contains pure business logic with no I/O dependencies
(no network, files, or clocks beyond timestamping results). The app/
package fetches market data and sentiment and feeds them through here.
"""
