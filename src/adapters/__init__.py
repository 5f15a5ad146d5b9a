"""Adaptadores de I/O (HTTP vía httpx, parseo HTML vía BeautifulSoup)."""
