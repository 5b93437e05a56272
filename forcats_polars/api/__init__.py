"""The APIs, grouped the way the R packages group them"""
