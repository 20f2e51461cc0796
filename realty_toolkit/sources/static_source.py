from __future__ import annotations

from .base import BaseFeedSource

SAMPLE_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
     xmlns:content="http://purl.org/rss/1.0/modules/content/"
     xmlns:dc="http://purl.org/dc/elements/1.1/"
     xmlns:media="http://search.yahoo.com/mrss/">
<channel>
  <title>Simplifying The Market</title>
  <link>https://www.simplifyingthemarket.com/en/</link>
  <description>Real estate news and market insights</description>
  <item>
    <title><![CDATA[Why Today's Buyers Are Returning to the Market]]></title>
    <link>https://www.simplifyingthemarket.com/en/2025/01/06/buyers-returning/</link>
    <pubDate>Mon, 06 Jan 2025 10:30:00 +0000</pubDate>
    <dc:creator><![CDATA[The KCM Crew]]></dc:creator>
    <category><![CDATA[For Buyers]]></category>
    <category><![CDATA[Interest Rates]]></category>
    <description><![CDATA[<p>Mortgage rates have eased &amp; inventory is growing.</p>]]></description>
    <content:encoded><![CDATA[<p><img src="https://files.simplifyingthemarket.com/wp-content/uploads/2025/01/buyers.jpg" alt="" /></p><p>Mortgage rates have eased &amp; inventory is growing.</p>]]></content:encoded>
  </item>
  <item>
    <title>What To Expect From Home Prices This Spring</title>
    <link>https://www.simplifyingthemarket.com/en/2025/01/03/home-prices-spring/</link>
    <pubDate>Fri, 03 Jan 2025 10:30:00 +0000</pubDate>
    <media:thumbnail url="https://files.simplifyingthemarket.com/wp-content/uploads/2025/01/prices.png" />
    <description>Experts forecast moderate price growth through the spring.</description>
  </item>
</channel>
</rss>
"""


class StaticFeedSource(BaseFeedSource):
    """Returns fixed RSS text for offline development."""

    def __init__(self, xml_text: str = SAMPLE_FEED) -> None:
        self._xml_text = xml_text

    def fetch(self) -> str:
        return self._xml_text
