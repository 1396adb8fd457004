"""
Bundled station lists.

``stations.json`` holds a subset of the Singapore MRT and LRT network:
the stations at the network's northern, southern, eastern and western
extremes, the busier interchanges, and a handful of Bukit Panjang,
Sengkang and Punggol LRT stops.  The subset keeps the network's full
extent, so the map bounds it produces match the system map:

    lat   1.265453 (HarbourFront)  ..  1.448193 (Woodlands North)
    long  103.636866 (Tuas Link)   ..  103.988836 (Changi Airport)

Swap in a complete list with ``MRT_TRACKER_STATIONS_FILE``.
"""
