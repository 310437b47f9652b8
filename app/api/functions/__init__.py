"""
Edge Functions Module

HTTP functions served under /functions/v1, mirroring the paths the hosted
data service uses for its own edge functions.
"""
