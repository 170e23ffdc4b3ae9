import logging

from paramdist import Normalized, Weights, distance_all, nearest

logging.basicConfig(level=logging.DEBUG)

fruits = ["apple", "orange", "lemon", "melon"]
unit = Weights(1, 1, 1)

print(nearest(unit, "lon", fruits))
# ScanResult(candidate='lemon', distance=2.0)
print(distance_all(unit, "lon", fruits))
# [5.0, 5.0, 2.0, 2.0]
print(distance_all(Normalized(unit), "lon", fruits))
# [1.0, 0.8333333333333334, 0.4, 0.4]
