"""
Field-Level Access Control for partner-class users.

Pipeline per request: SharingConfigStore -> FieldSetResolver -> ProjectionPlanner
-> QueryProjector -> ResponseAssembler, composed by PartnerSharingEngine.
"""
