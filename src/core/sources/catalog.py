#!/usr/bin/env python3
"""
Catalog of Canadian news outlets.

Each profile carries the outlet's declared political leaning and a baseline
credibility score. Outlets described as center-left or center-right are
recorded as center.
"""

from typing import Tuple

from ..models.article import Bias
from .base import SourceProfile, SourceCategory


CANADIAN_SOURCES: Tuple[SourceProfile, ...] = (
    # Major Mainstream Media
    SourceProfile("CBC News", "https://www.cbc.ca",
                  "https://www.cbc.ca/cmlink/rss-topstories",
                  Bias.CENTER, 85, SourceCategory.GOVERNMENT),
    SourceProfile("Global News", "https://globalnews.ca",
                  "https://globalnews.ca/feed/",
                  Bias.CENTER, 82, SourceCategory.MAINSTREAM),
    SourceProfile("CTV News", "https://www.ctvnews.ca",
                  "https://www.ctvnews.ca/rss/ctvnews-ca-top-stories-public-rss-1.822009",
                  Bias.CENTER, 83, SourceCategory.MAINSTREAM),
    SourceProfile("The Globe and Mail", "https://www.theglobeandmail.com",
                  "https://www.theglobeandmail.com/arc/outboundfeeds/rss/category/politics/",
                  Bias.CENTER, 88, SourceCategory.MAINSTREAM),
    SourceProfile("National Post", "https://nationalpost.com",
                  "https://nationalpost.com/feed/",
                  Bias.RIGHT, 78, SourceCategory.MAINSTREAM),
    SourceProfile("Toronto Star", "https://www.thestar.com",
                  "https://www.thestar.com/politics.rss",
                  Bias.LEFT, 79, SourceCategory.MAINSTREAM),
    # French-Canadian Media
    SourceProfile("Le Devoir", "https://www.ledevoir.com",
                  "https://www.ledevoir.com/rss/section/politique.xml",
                  Bias.CENTER, 84, SourceCategory.MAINSTREAM),
    SourceProfile("La Presse", "https://www.lapresse.ca",
                  "https://www.lapresse.ca/actualites/politique.rss",
                  Bias.CENTER, 82, SourceCategory.MAINSTREAM),
    SourceProfile("Radio-Canada", "https://ici.radio-canada.ca",
                  "https://ici.radio-canada.ca/rss/73",
                  Bias.CENTER, 87, SourceCategory.GOVERNMENT),
    SourceProfile("Journal de Montréal", "https://www.journaldemontreal.com",
                  "https://www.journaldemontreal.com/rss.xml",
                  Bias.RIGHT, 71, SourceCategory.MAINSTREAM),
    # Government/Official Sources
    SourceProfile("The Canadian Press", "https://www.thecanadianpress.com",
                  "https://www.thecanadianpress.com/feed/",
                  Bias.CENTER, 90, SourceCategory.GOVERNMENT),
    SourceProfile("Government of Canada News", "https://www.canada.ca",
                  "https://www.canada.ca/en/news.rss",
                  Bias.CENTER, 95, SourceCategory.GOVERNMENT),
    # Political Specialist Media
    SourceProfile("iPolitics", "https://ipolitics.ca",
                  "https://ipolitics.ca/feed/",
                  Bias.CENTER, 81, SourceCategory.ALTERNATIVE),
    SourceProfile("The Hill Times", "https://www.hilltimes.com",
                  "https://www.hilltimes.com/feed/",
                  Bias.CENTER, 86, SourceCategory.ALTERNATIVE),
    SourceProfile("Policy Options", "https://policyoptions.irpp.org",
                  "https://policyoptions.irpp.org/feed/",
                  Bias.CENTER, 89, SourceCategory.ALTERNATIVE),
    # Regional Major Papers
    SourceProfile("Calgary Herald", "https://calgaryherald.com",
                  "https://calgaryherald.com/feed/",
                  Bias.CENTER, 76, SourceCategory.MAINSTREAM),
    SourceProfile("Edmonton Journal", "https://edmontonjournal.com",
                  "https://edmontonjournal.com/feed/",
                  Bias.CENTER, 77, SourceCategory.MAINSTREAM),
    SourceProfile("Vancouver Sun", "https://vancouversun.com",
                  "https://vancouversun.com/feed/",
                  Bias.CENTER, 78, SourceCategory.MAINSTREAM),
    SourceProfile("The Province", "https://theprovince.com",
                  "https://theprovince.com/feed/",
                  Bias.CENTER, 74, SourceCategory.MAINSTREAM),
    SourceProfile("Times Colonist", "https://www.timescolonist.com",
                  "https://www.timescolonist.com/feed/",
                  Bias.CENTER, 75, SourceCategory.MAINSTREAM),
    SourceProfile("Winnipeg Free Press", "https://www.winnipegfreepress.com",
                  "https://www.winnipegfreepress.com/rss/",
                  Bias.CENTER, 79, SourceCategory.MAINSTREAM),
    SourceProfile("The Chronicle Herald", "https://www.thechronicleherald.ca",
                  "https://www.thechronicleherald.ca/rss/",
                  Bias.CENTER, 73, SourceCategory.MAINSTREAM),
    # Independent & Alternative Media
    SourceProfile("The Tyee", "https://thetyee.ca",
                  "https://thetyee.ca/rss2.xml",
                  Bias.LEFT, 82, SourceCategory.ALTERNATIVE),
    SourceProfile("Canadaland", "https://www.canadaland.com",
                  "https://www.canadaland.com/feed/",
                  Bias.LEFT, 78, SourceCategory.ALTERNATIVE),
    SourceProfile("The Breach", "https://breachmedia.ca",
                  "https://breachmedia.ca/feed/",
                  Bias.LEFT, 76, SourceCategory.ALTERNATIVE),
    SourceProfile("True North", "https://tnc.news",
                  "https://tnc.news/feed/",
                  Bias.RIGHT, 65, SourceCategory.ALTERNATIVE),
    SourceProfile("Rebel News", "https://www.rebelnews.com",
                  "https://www.rebelnews.com/rss.xml",
                  Bias.RIGHT, 45, SourceCategory.ALTERNATIVE),
    SourceProfile("Press Progress", "https://pressprogress.ca",
                  "https://pressprogress.ca/feed/",
                  Bias.LEFT, 72, SourceCategory.ALTERNATIVE),
    SourceProfile("National Observer", "https://www.nationalobserver.com",
                  "https://www.nationalobserver.com/rss.xml",
                  Bias.LEFT, 81, SourceCategory.ALTERNATIVE),
    SourceProfile("The Narwhal", "https://thenarwhal.ca",
                  "https://thenarwhal.ca/feed/",
                  Bias.LEFT, 85, SourceCategory.ALTERNATIVE),
    # Business & Financial
    SourceProfile("Financial Post", "https://financialpost.com",
                  "https://financialpost.com/feed/",
                  Bias.CENTER, 83, SourceCategory.MAINSTREAM),
    SourceProfile("BNN Bloomberg", "https://www.bnnbloomberg.ca",
                  "https://www.bnnbloomberg.ca/rss.xml",
                  Bias.CENTER, 86, SourceCategory.MAINSTREAM),
    # Indigenous Media
    SourceProfile("APTN News", "https://www.aptnnews.ca",
                  "https://www.aptnnews.ca/feed/",
                  Bias.CENTER, 88, SourceCategory.ALTERNATIVE),
    SourceProfile("Windspeaker", "https://windspeaker.com",
                  "https://windspeaker.com/feed/",
                  Bias.CENTER, 84, SourceCategory.ALTERNATIVE),
    # Online-Native
    SourceProfile("HuffPost Canada", "https://www.huffpost.com/canada",
                  "https://www.huffpost.com/section/canada/feed",
                  Bias.LEFT, 74, SourceCategory.ALTERNATIVE),
    SourceProfile("Blacklock's Reporter", "https://www.blacklocks.ca",
                  "https://www.blacklocks.ca/feed/",
                  Bias.CENTER, 89, SourceCategory.ALTERNATIVE),
    SourceProfile("The Conversation Canada", "https://theconversation.com/ca",
                  "https://theconversation.com/ca/articles.atom",
                  Bias.CENTER, 91, SourceCategory.ALTERNATIVE),
    # Additional Regional Papers
    SourceProfile("Ottawa Citizen", "https://ottawacitizen.com",
                  "https://ottawacitizen.com/feed/",
                  Bias.CENTER, 76, SourceCategory.MAINSTREAM),
    SourceProfile("Montreal Gazette", "https://montrealgazette.com",
                  "https://montrealgazette.com/feed/",
                  Bias.CENTER, 77, SourceCategory.MAINSTREAM),
    SourceProfile("Regina Leader-Post", "https://leaderpost.com",
                  "https://leaderpost.com/feed/",
                  Bias.CENTER, 73, SourceCategory.MAINSTREAM),
    SourceProfile("Saskatoon StarPhoenix", "https://thestarphoenix.com",
                  "https://thestarphoenix.com/feed/",
                  Bias.CENTER, 74, SourceCategory.MAINSTREAM),
    # Local/Community Papers
    SourceProfile("North Shore News", "https://www.nsnews.com",
                  "https://www.nsnews.com/rss.xml",
                  Bias.CENTER, 72, SourceCategory.MAINSTREAM),
    SourceProfile("The Record (Kitchener-Waterloo)", "https://www.therecord.com",
                  "https://www.therecord.com/feed/",
                  Bias.CENTER, 71, SourceCategory.MAINSTREAM),
    SourceProfile("London Free Press", "https://lfpress.com",
                  "https://lfpress.com/feed/",
                  Bias.CENTER, 73, SourceCategory.MAINSTREAM),
    SourceProfile("Windsor Star", "https://windsorstar.com",
                  "https://windsorstar.com/feed/",
                  Bias.CENTER, 74, SourceCategory.MAINSTREAM),
    # Additional French Media
    SourceProfile("Le Journal de Québec", "https://www.journaldequebec.com",
                  "https://www.journaldequebec.com/rss.xml",
                  Bias.RIGHT, 70, SourceCategory.MAINSTREAM),
    SourceProfile("TVA Nouvelles", "https://www.tvanouvelles.ca",
                  "https://www.tvanouvelles.ca/rss.xml",
                  Bias.CENTER, 75, SourceCategory.MAINSTREAM),
    SourceProfile("Le Soleil", "https://www.lesoleil.com",
                  "https://www.lesoleil.com/rss.xml",
                  Bias.CENTER, 78, SourceCategory.MAINSTREAM),
    # Atlantic Canada
    SourceProfile("Telegraph-Journal", "https://www.telegraphjournal.com",
                  "https://www.telegraphjournal.com/rss/",
                  Bias.CENTER, 75, SourceCategory.MAINSTREAM),
    SourceProfile("The Guardian (PEI)", "https://www.theguardian.pe.ca",
                  "https://www.theguardian.pe.ca/rss/",
                  Bias.CENTER, 73, SourceCategory.MAINSTREAM),
    SourceProfile("The Telegram", "https://www.thetelegram.com",
                  "https://www.thetelegram.com/rss/",
                  Bias.CENTER, 74, SourceCategory.MAINSTREAM),
    # Northern/Territorial
    SourceProfile("Whitehorse Star", "https://www.whitehorsestar.com",
                  "https://www.whitehorsestar.com/rss/",
                  Bias.CENTER, 72, SourceCategory.MAINSTREAM),
    SourceProfile("Yellowknifer", "https://www.nnsl.com/yellowknifer",
                  "https://www.nnsl.com/yellowknifer/rss/",
                  Bias.CENTER, 71, SourceCategory.MAINSTREAM),
    SourceProfile("Nunavut News", "https://www.nunavutnews.com",
                  "https://www.nunavutnews.com/rss/",
                  Bias.CENTER, 70, SourceCategory.MAINSTREAM),
    # Additional Independent/Alternative
    SourceProfile("Ricochet", "https://ricochet.media",
                  "https://ricochet.media/en/feed",
                  Bias.LEFT, 79, SourceCategory.ALTERNATIVE),
    SourceProfile("The Energy Mix", "https://www.theenergymix.com",
                  "https://www.theenergymix.com/feed/",
                  Bias.LEFT, 83, SourceCategory.ALTERNATIVE),
    SourceProfile("Epoch Times Canada", "https://www.theepochtimes.com/canada",
                  "https://www.theepochtimes.com/canada/feed",
                  Bias.RIGHT, 68, SourceCategory.ALTERNATIVE),
    SourceProfile("Western Standard", "https://www.westernstandard.news",
                  "https://www.westernstandard.news/feed/",
                  Bias.RIGHT, 62, SourceCategory.ALTERNATIVE),
    SourceProfile("The Post Millennial", "https://thepostmillennial.com",
                  "https://thepostmillennial.com/feed",
                  Bias.RIGHT, 58, SourceCategory.ALTERNATIVE),
    # Specialized/Professional
    SourceProfile("Law Times", "https://www.lawtimesnews.com",
                  "https://www.lawtimesnews.com/rss/",
                  Bias.CENTER, 85, SourceCategory.ALTERNATIVE),
    SourceProfile("Canadian Lawyer", "https://www.canadianlawyermag.com",
                  "https://www.canadianlawyermag.com/rss/",
                  Bias.CENTER, 87, SourceCategory.ALTERNATIVE),
    SourceProfile("Parliamentary Hill Times", "https://www.hilltimes.com",
                  "https://www.hilltimes.com/feed/",
                  Bias.CENTER, 86, SourceCategory.ALTERNATIVE),
)
