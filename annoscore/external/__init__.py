"""
Interfaces to tools outside of annoscore (tokenizers, sentence splitters)
"""
