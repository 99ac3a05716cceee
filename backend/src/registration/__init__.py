"""SOAP registration web service publishing the organization validation facade"""
