# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

from django.apps import AppConfig


class CombinedConfig(AppConfig):
    name = "combined"
    verbose_name = "Combined question"

    def ready(self):
        import combined.combinable
