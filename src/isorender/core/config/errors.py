# src/isorender/core/config/errors.py
"""
Exceções canônicas da camada de configuração do isorender.

Estas exceções descrevem falhas estruturais ao ler ou mesclar arquivos e
mapas de configuração. Elas são levantadas pelo loader e pelo deep-merge;
a resolução final (`resolve_settings`) as converte em `ConfigurationError`
registrado em log, substituindo os valores inválidos pelos defaults.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de compilação ou de renderização
"""


class ConfigError(Exception):
    """
    Exceção base para erros estruturais de configuração.

    Permite:
        - captura genérica de erros de configuração
        - distinção clara entre falhas de configuração e falhas de renderização
    """


class SettingsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de settings informado não existe.

    Limites explícitos:
        - Não tenta inferir ou criar o arquivo automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de settings não é suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz do arquivo de settings
    não é um mapa chave-valor.
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando uma chave do override tem tipo incompatível
    com o default correspondente.

    Exemplo de conflito:
        - default:  {"hydrate": true}
        - override: {"hydrate": {"enabled": false}}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """
