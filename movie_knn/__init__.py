"""Item-based collaborative filtering for MovieLens: similar movies by rating vectors.

Each movie is represented by a dense vector of user ratings (one slot per user,
0.0 where the user did not rate it). Similar movies are the K nearest vectors
under a distance metric, found by an exact brute-force scan.
"""
