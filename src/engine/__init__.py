"""Reveal engine: visibility trigger, stagger animator and frame clock"""
